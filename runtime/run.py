from __future__ import annotations

import argparse
import json
import logging
import os
import platform
import sys
from dataclasses import asdict

import requests

from config import get_settings
from dataset import DependencyDataSet
from errors import DataSetError
from logger import setup_logging
from source import ManifestSource


def _make_source(args, settings) -> ManifestSource:
    if args.payload:
        return ManifestSource.from_files(args.payload, args.flags)
    return ManifestSource.from_settings(settings)


def _load_dataset(args) -> DependencyDataSet:
    settings = get_settings()
    return DependencyDataSet(source=_make_source(args, settings)).init()


def _write(payload, out_path: str | None = None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if not out_path:
        print(text)
        return
    with open(out_path, "w", encoding="utf-8") as handle:
        handle.write(text)
    print(f"Wrote {out_path}")


def cmd_stats(args) -> None:
    ds = _load_dataset(args)
    _write(asdict(ds.statistics()), args.out)


def cmd_packages(args) -> None:
    ds = _load_dataset(args)
    _write([asdict(p) for p in ds.packages], args.out)


def cmd_graph(args) -> None:
    ds = _load_dataset(args)
    graph = ds.build()
    _write({"nodes": graph["nodes"].to_list(), "edges": graph["edges"].to_list()}, args.out)


def cmd_doctor(_args) -> None:
    settings = get_settings()
    checks = []

    def add_check(name: str, ok: bool, detail: str = "") -> None:
        checks.append((name, ok, detail))

    add_check("python", True, f"{platform.python_version()} ({sys.executable})")
    add_check("data_dir", os.path.isdir(settings.data_dir), settings.data_dir)
    add_check("log_file", os.path.exists(settings.log_file), settings.log_file)
    for name, url in (("data_url", settings.data_url), ("flags_url", settings.flags_url)):
        try:
            resp = requests.get(url, timeout=settings.http_timeout)
            add_check(name, resp.ok, f"{url} ({resp.status_code})")
        except requests.RequestException as exc:
            add_check(name, False, f"{url} ({exc.__class__.__name__})")

    for name, ok, detail in checks:
        status = "OK" if ok else "WARN"
        print(f"{status:<5} {name:<14} {detail}")


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--payload", help="Manifest JSON file (default: fetch DEPGRAPH_DATA_URL)")
    parser.add_argument("--flags", help="Flags JSON file (required with --payload)")
    parser.add_argument("-o", "--out", help="Write JSON output to this file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="depgraph", description="Dependency manifest graph and statistics")
    sub = parser.add_subparsers(dest="cmd", required=True)

    stats = sub.add_parser("stats", help="Print aggregate statistics")
    _add_source_args(stats)
    stats.set_defaults(func=cmd_stats)

    packages = sub.add_parser("packages", help="List package summaries")
    _add_source_args(packages)
    packages.set_defaults(func=cmd_packages)

    graph = sub.add_parser("graph", help="Dump render-ready nodes and edges")
    _add_source_args(graph)
    graph.set_defaults(func=cmd_graph)

    doctor = sub.add_parser("doctor", help="Check settings and source reachability")
    doctor.set_defaults(func=cmd_doctor)

    return parser


def main(argv=None) -> int:
    settings = get_settings()
    setup_logging(settings.log_file, settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "payload", None) and not args.flags:
        parser.error("--payload requires --flags")
    try:
        args.func(args)
    except DataSetError as exc:
        logging.exception("depgraph %s failed", args.cmd)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
