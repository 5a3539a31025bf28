from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

UNKNOWN_LICENSE = "Unknown"


class Aggregator:
    """Running histograms of file extensions, licenses and authors.

    Counts accumulate across calls; a fresh instance is used for every
    manifest walk.
    """

    def __init__(self) -> None:
        self.extensions: Dict[str, int] = {}
        self.licenses: Dict[str, int] = {UNKNOWN_LICENSE: 0}
        self.authors: Dict[str, Dict[str, Any]] = {}

    def record_extensions(self, extensions: Iterable[str]) -> None:
        for ext_name in extensions:
            if ext_name == "":
                continue
            self.extensions[ext_name] = self.extensions.get(ext_name, 0) + 1

    def record_license(self, license: Any) -> None:
        license_ids = None
        if isinstance(license, dict):
            license_ids = license.get("uniqueLicenseIds")
        # Plain strings and unexpected shapes both land in the Unknown bucket.
        if isinstance(license, str) or not isinstance(license_ids, list):
            self.licenses[UNKNOWN_LICENSE] += 1
            return
        for license_name in license_ids:
            self.licenses[license_name] = self.licenses.get(license_name, 0) + 1

    def record_author(self, author: Any) -> None:
        name = _author_name(author)
        if name is None:
            return
        record = self.authors.get(name)
        if record is not None:
            record["count"] += 1
            return
        self.authors[name] = dict(author, count=1)

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        return {
            "extensions": dict(self.extensions),
            "licenses": dict(self.licenses),
            "authors": {name: dict(record) for name, record in self.authors.items()},
        }


def _author_name(author: Any) -> Optional[str]:
    if isinstance(author, dict) and "name" in author:
        return author["name"]
    return None
