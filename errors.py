from __future__ import annotations


class DataSetError(RuntimeError):
    """Base class for failures that abort a dataset build."""


class SourceUnavailable(DataSetError):
    def __init__(self, name: str, location: str, reason: str = "") -> None:
        self.name = name
        self.location = location
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to load {name} document from {location}{detail}")


class DanglingReference(DataSetError):
    def __init__(self, source: str, target_name: str, target_version: str) -> None:
        self.source = source
        self.target_name = target_name
        self.target_version = target_version
        super().__init__(
            f"{source} is used by {target_name}@{target_version}, which is not in the manifest"
        )
