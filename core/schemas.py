from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

NODE_FONT = {"multi": "html"}


@dataclass
class Node:
    id: int
    label: str
    color: Dict[str, Any]
    font: Dict[str, Any] = field(default_factory=lambda: dict(NODE_FONT))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label, "color": self.color, "font": self.font}


@dataclass
class Edge:
    source: int
    target: int

    def to_dict(self) -> Dict[str, Any]:
        # "from" is a keyword, hence the renamed fields.
        return {"from": self.source, "to": self.target}


@dataclass
class PackageSummary:
    id: int
    name: str
    version: str
    flags: str = ""


@dataclass
class Statistics:
    dependencies_count: int
    size: int
    indirect_dependencies: int
    extensions: Dict[str, int] = field(default_factory=dict)
    licenses: Dict[str, int] = field(default_factory=dict)
    authors: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    warnings: List[Any] = field(default_factory=list)
