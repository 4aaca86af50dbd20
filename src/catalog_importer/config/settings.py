"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

_SERVICEACCOUNT_TOKEN = "/var/run/secrets/kubesphere.io/serviceaccount/token"


def _default_token_file() -> Path:
    """Return the bearer token file used when no token is given.

    CATALOG_IMPORT_TOKEN_FILE overrides the in-cluster service account path.
    """
    override = os.environ.get("CATALOG_IMPORT_TOKEN_FILE", "")
    if override:
        return Path(override)
    return Path(_SERVICEACCOUNT_TOKEN)


@dataclass
class Settings:
    api_group: str = "application.kubesphere.io"
    api_version: str = "v2"
    token_file: Path = field(default_factory=_default_token_file)

    # Label keys on application / applicationversion resources
    category_label: str = "application.kubesphere.io/app-category-name"
    store_label: str = "application.kubesphere.io/app-store"
    app_id_label: str = "application.kubesphere.io/app-id"

    # Correlates the records created by one run until the final relabel
    sentinel_category: str = "openpitrix-import"
    default_category: str = "kubesphere-app-uncategorized"
    admin_user: str = "admin"
    active_state: str = "active"

    repo_name: str = "upload"
    app_type: str = "helm"
    workspace: str = ""  # empty = global

    api_timeout: float = 5.0
    k8s_request_timeout: int = 30
    download_timeout: float | None = None
    upload_delay: float = 0.2

    @property
    def catalog_api_prefix(self) -> str:
        return f"/kapis/{self.api_group}/{self.api_version}"


@dataclass
class ImportConfig:
    """Per-run values, built once by the CLI and handed to the pipeline."""

    server_url: str
    repo_url: str
    token: str = ""
    limit: int = 1
    context: str | None = None


def read_token(path: Path) -> str:
    """Read a bearer token from disk, stripping the trailing newline."""
    return path.read_text(encoding="utf-8").strip()


# Global singleton
settings = Settings()
