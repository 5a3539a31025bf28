from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, Dict, Tuple

import requests

from errors import SourceUnavailable


def fetch_json(url: str, timeout: float = 30) -> Any:
    resp = requests.get(url, headers={"Accept": "application/json"}, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


class ManifestSource:
    """Supplies the manifest and flags documents.

    Both loaders run on their own thread and are joined before anything is
    returned; if either fails the whole load fails.
    """

    def __init__(
        self,
        manifest_location: str,
        flags_location: str,
        loader: Callable[[str], Any],
    ) -> None:
        self.manifest_location = manifest_location
        self.flags_location = flags_location
        self.loader = loader

    @classmethod
    def from_urls(cls, data_url: str, flags_url: str, timeout: float = 30) -> "ManifestSource":
        return cls(data_url, flags_url, lambda url: fetch_json(url, timeout=timeout))

    @classmethod
    def from_files(cls, payload_path: str, flags_path: str) -> "ManifestSource":
        return cls(payload_path, flags_path, read_json)

    @classmethod
    def from_settings(cls, settings) -> "ManifestSource":
        return cls.from_urls(settings.data_url, settings.flags_url, timeout=settings.http_timeout)

    def fetch(self) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        jobs = {"manifest": self.manifest_location, "flags": self.flags_location}
        results: Dict[str, Any] = {}
        errors: Dict[str, Exception] = {}

        def load(name: str, location: str) -> None:
            try:
                results[name] = self.loader(location)
            except Exception as exc:
                errors[name] = exc

        threads = [
            threading.Thread(target=load, args=(name, location), daemon=True)
            for name, location in jobs.items()
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for name in jobs:
            if name in errors:
                exc = errors[name]
                logging.error("[ManifestSource] %s load failed from %s: %s", name, jobs[name], exc)
                raise SourceUnavailable(name, jobs[name], str(exc)) from exc
        logging.info("[ManifestSource] loaded manifest and flags documents")
        return results["manifest"], results["flags"]
