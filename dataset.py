from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from aggregator import Aggregator
from core.schemas import Edge, Node, PackageSummary, Statistics
from errors import DanglingReference
from flags import INDIRECT_DEPENDENCIES_FLAG, classify
from formatting import pretty_bytes
from graph_dataset import GraphDataSet, materialize
from linker import Linker

_WHITESPACE_RE = re.compile(r"\s")


@dataclass
class GraphBuild:
    nodes: List[Dict[str, Any]] = field(default_factory=list)
    edges: List[Dict[str, Any]] = field(default_factory=list)
    linker: Linker = field(default_factory=Linker)
    summaries: List[PackageSummary] = field(default_factory=list)
    counters: Aggregator = field(default_factory=Aggregator)
    total_size: int = 0
    indirect_dependency_count: int = 0
    dependency_count: int = 0
    warnings: List[Any] = field(default_factory=list)


def build_graph(payload: Dict[str, Any], flags_doc: Optional[Dict[str, Any]] = None) -> GraphBuild:
    """Walk the manifest once and return nodes, edges, linker and counters.

    Descriptors are enriched in place with ``name``, ``version`` and
    ``hidden``. A ``usedBy`` entry pointing outside the manifest raises
    DanglingReference.
    """
    dependencies = payload["dependencies"]
    result = GraphBuild(warnings=list(payload.get("warnings") or []))
    result.dependency_count = len(dependencies)

    for package_name, entry in dependencies.items():
        metadata = entry.get("metadata")
        vulnerabilities = entry.get("vulnerabilities")

        for version in entry["versions"]:
            descriptor = entry[version]
            package_id = descriptor["id"]
            flags = descriptor["flags"]
            size = descriptor["size"]
            descriptor["name"] = package_name
            descriptor["version"] = version
            descriptor["hidden"] = False

            result.counters.record_extensions(descriptor["composition"]["extensions"])
            result.counters.record_license(descriptor["license"])
            result.counters.record_author(descriptor["author"])

            if INDIRECT_DEPENDENCIES_FLAG in flags:
                result.indirect_dependency_count += 1
            result.total_size += size

            flag_str, color = classify(
                package_id, flags, flags_doc, metadata, vulnerabilities, entry["versions"]
            )
            result.summaries.append(
                PackageSummary(
                    id=package_id,
                    name=package_name,
                    version=version,
                    flags=_WHITESPACE_RE.sub("", flag_str),
                )
            )

            label = f"{package_name}@{version}{flag_str}\n<b>[{pretty_bytes(size)}]</b>"
            result.nodes.append(Node(id=package_id, label=label, color=color).to_dict())
            result.linker.set(package_id, descriptor)

            for used_by_name, used_by_version in descriptor["usedBy"].items():
                try:
                    target_id = dependencies[used_by_name][used_by_version]["id"]
                except (KeyError, TypeError) as exc:
                    raise DanglingReference(
                        f"{package_name}@{version}", used_by_name, used_by_version
                    ) from exc
                result.edges.append(Edge(source=package_id, target=target_id).to_dict())

    return result


class DependencyDataSet:
    """Graph and statistics view over a dependency manifest.

    ``init()`` loads (or accepts) the manifest and flags documents, walks the
    manifest and publishes the result. Until the walk succeeds the previous
    state is kept, so a failed build never leaves a partial dataset behind.
    """

    def __init__(self, source=None, on_ready: Callable[[Dict[str, Any]], None] | None = None) -> None:
        self.source = source
        self.on_ready = on_ready
        self.flags: Dict[str, Any] = {}
        self.payload: Dict[str, Any] | None = None
        self._build = GraphBuild()

    def init(self, payload: Dict[str, Any] | None = None, flags: Dict[str, Any] | None = None) -> "DependencyDataSet":
        logging.info("[DependencyDataSet] Initialization started...")
        if payload is None:
            if self.source is None:
                raise RuntimeError("DependencyDataSet needs a payload or a source")
            payload, flags = self.source.fetch()
        flags = flags if flags is not None else {}

        build = build_graph(payload, flags)
        self.flags = flags
        self.payload = payload
        self._build = build
        logging.info(
            "[DependencyDataSet] Initialization done! %d packages, %d nodes, %d edges",
            build.dependency_count,
            len(build.nodes),
            len(build.edges),
        )
        if self.on_ready is not None:
            self.on_ready(payload)
        return self

    @property
    def warnings(self) -> List[Any]:
        return self._build.warnings

    @property
    def packages(self) -> List[PackageSummary]:
        return self._build.summaries

    @property
    def linker(self) -> Linker:
        return self._build.linker

    @property
    def extensions(self) -> Dict[str, int]:
        return self._build.counters.extensions

    @property
    def licenses(self) -> Dict[str, int]:
        return self._build.counters.licenses

    @property
    def authors(self) -> Dict[str, Dict[str, Any]]:
        return self._build.counters.authors

    @property
    def dependencies_count(self) -> int:
        return self._build.dependency_count

    @property
    def size(self) -> int:
        return self._build.total_size

    @property
    def indirect_dependencies(self) -> int:
        return self._build.indirect_dependency_count

    @property
    def raw_nodes(self) -> List[Dict[str, Any]]:
        return self._build.nodes

    @property
    def raw_edges(self) -> List[Dict[str, Any]]:
        return self._build.edges

    def build(self) -> Dict[str, GraphDataSet]:
        return materialize(self._build.nodes, self._build.edges)

    def statistics(self) -> Statistics:
        counters = self._build.counters.snapshot()
        return Statistics(
            dependencies_count=self.dependencies_count,
            size=self.size,
            indirect_dependencies=self.indirect_dependencies,
            extensions=counters["extensions"],
            licenses=counters["licenses"],
            authors=counters["authors"],
            warnings=list(self.warnings),
        )
