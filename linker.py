from __future__ import annotations

from typing import Any, Dict, Iterator, List


class Linker:
    """Maps a package version id to its enriched manifest descriptor.

    Descriptors are stored by reference, so changes made through the linker
    (e.g. ``set_hidden``) are visible in the manifest as well.
    """

    def __init__(self) -> None:
        self._by_id: Dict[int, Dict[str, Any]] = {}

    def set(self, package_id, descriptor: Dict[str, Any]) -> None:
        self._by_id[int(package_id)] = descriptor

    def get(self, package_id, default=None) -> Dict[str, Any] | None:
        return self._by_id.get(int(package_id), default)

    def set_hidden(self, package_id, hidden: bool = True) -> Dict[str, Any]:
        descriptor = self._by_id[int(package_id)]
        descriptor["hidden"] = hidden
        return descriptor

    def keys(self) -> List[int]:
        return list(self._by_id.keys())

    def __getitem__(self, package_id) -> Dict[str, Any]:
        return self._by_id[int(package_id)]

    def __contains__(self, package_id) -> bool:
        try:
            return int(package_id) in self._by_id
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[int]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)
