"""Exception hierarchy for the import pipeline."""

from __future__ import annotations


class CatalogImportError(Exception):
    """Base class for every error raised by catalog_importer."""


class IndexUnavailable(CatalogImportError):
    """The chart repository index could not be downloaded."""


class IndexParseError(CatalogImportError):
    """The chart repository index is not a valid Helm index."""


class CatalogAPIError(CatalogImportError):
    """The catalog ingestion API answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int, body: str = ""):
        self.url = url
        self.status_code = status_code
        self.body = body
        detail = f": {body}" if body else ""
        super().__init__(f"{url} returned status code {status_code}{detail}")


class ClientInitError(CatalogImportError):
    """No usable Kubernetes configuration could be loaded."""


class ReconcileError(CatalogImportError):
    """A list or update call failed inside a reconciliation stage."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"{stage}: {message}")


class StageFailed(CatalogImportError):
    """A pipeline stage failed; later stages were not run."""

    def __init__(self, position: int, total: int, name: str, cause: Exception):
        self.position = position
        self.total = total
        self.name = name
        self.cause = cause
        super().__init__(f"[{position}/{total}] {name} failed: {cause}")
