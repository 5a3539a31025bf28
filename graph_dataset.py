from __future__ import annotations

import copy
from typing import Any, Dict, Iterator, List, Sequence


class GraphDataSet:
    """Render-ready collection of node or edge records.

    Items are deep-copied on construction so the source lists stay untouched
    and two datasets built from the same lists never share state.
    """

    def __init__(self, items: Sequence[Dict[str, Any]] = ()) -> None:
        self._items: Dict[Any, Dict[str, Any]] = {}
        for index, item in enumerate(items):
            record = copy.deepcopy(item)
            key = record.get("id", index)
            self._items[key] = record

    def get(self, item_id, default=None) -> Dict[str, Any] | None:
        return self._items.get(item_id, default)

    def ids(self) -> List[Any]:
        return list(self._items.keys())

    def to_list(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(item) for item in self._items.values()]

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphDataSet):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"GraphDataSet({len(self._items)} items)"


def materialize(raw_nodes: Sequence[Dict[str, Any]], raw_edges: Sequence[Dict[str, Any]]) -> Dict[str, GraphDataSet]:
    return {"nodes": GraphDataSet(raw_nodes), "edges": GraphDataSet(raw_edges)}
