"""Data models for the catalog importer."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class EntryOutcome(enum.Enum):
    UPLOADED = "uploaded"
    DOWNLOAD_FAILED = "download-failed"
    UPLOAD_FAILED = "upload-failed"
    SKIPPED_LIMIT = "skipped-limit"
    SKIPPED_DEPRECATED = "skipped-deprecated"

    @property
    def is_failure(self) -> bool:
        return self in (EntryOutcome.DOWNLOAD_FAILED, EntryOutcome.UPLOAD_FAILED)

    @property
    def is_skip(self) -> bool:
        return self in (EntryOutcome.SKIPPED_LIMIT, EntryOutcome.SKIPPED_DEPRECATED)


@dataclass(frozen=True)
class LabelSelector:
    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class ResourceKind:
    """A cluster-scoped custom resource addressed through the dynamic API."""

    group: str
    version: str
    plural: str

    def __str__(self) -> str:
        return f"{self.plural}.{self.version}.{self.group}"
