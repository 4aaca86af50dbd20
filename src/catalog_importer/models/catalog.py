"""Catalog upload and reconciliation models."""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog_importer.models import EntryOutcome


@dataclass
class UploadRequest:
    package: str  # base64-encoded chart archive
    category_name: str
    repo_name: str = "upload"
    workspace: str = ""
    app_type: str = "helm"

    def to_dict(self) -> dict[str, str]:
        return {
            "repoName": self.repo_name,
            "package": self.package,
            "categoryName": self.category_name,
            "workspace": self.workspace,
            "appType": self.app_type,
        }


@dataclass
class EntryResult:
    version: str
    outcome: EntryOutcome
    reason: str = ""


@dataclass
class PackageReport:
    name: str
    app_id: str = ""
    entries: list[EntryResult] = field(default_factory=list)

    @property
    def uploaded(self) -> int:
        return self._count(lambda o: o is EntryOutcome.UPLOADED)

    @property
    def failed(self) -> int:
        return self._count(lambda o: o.is_failure)

    @property
    def skipped(self) -> int:
        return self._count(lambda o: o.is_skip)

    def record(self, version: str, outcome: EntryOutcome, reason: str = "") -> None:
        self.entries.append(EntryResult(version=version, outcome=outcome, reason=reason))

    def _count(self, predicate) -> int:
        return sum(1 for e in self.entries if predicate(e.outcome))


@dataclass
class UploadSummary:
    packages: list[PackageReport] = field(default_factory=list)

    @property
    def uploaded(self) -> int:
        return sum(p.uploaded for p in self.packages)

    @property
    def failed(self) -> int:
        return sum(p.failed for p in self.packages)

    @property
    def skipped(self) -> int:
        return sum(p.skipped for p in self.packages)

    @property
    def applications_created(self) -> int:
        return sum(1 for p in self.packages if p.app_id)


@dataclass
class StageResult:
    position: int
    name: str
    updated: int


@dataclass
class ImportReport:
    uploads: UploadSummary = field(default_factory=UploadSummary)
    stages: list[StageResult] = field(default_factory=list)
