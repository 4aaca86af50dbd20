"""List-then-update passes that publish the imported catalog records.

Every pass is fail-fast: the first failing list or update call stops the
pass and surfaces as a ReconcileError. Items already updated stay updated.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from kubernetes.client import ApiException
from urllib3.exceptions import HTTPError

from catalog_importer.config.settings import Settings, settings as default_settings
from catalog_importer.core.k8s_client import K8sClient
from catalog_importer.core.selectors import app_versions_selector, application_versions, applications
from catalog_importer.errors import ReconcileError
from catalog_importer.models import LabelSelector, ResourceKind

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """RFC 3339, microsecond precision, UTC ``Z`` suffix."""
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _name(obj: dict) -> str:
    return (obj.get("metadata") or {}).get("name", "<unknown>")


def _set_status(obj: dict, **fields: str) -> None:
    status = obj.get("status")
    if not isinstance(status, dict):
        status = {}
        obj["status"] = status
    status.update(fields)


class CatalogReconciler:
    """Brings the applications selected by a label selector to their published state."""

    def __init__(self, k8s: K8sClient, settings: Settings | None = None, now: Clock = utc_now):
        self.k8s = k8s
        self.settings = settings or default_settings
        self._now = now
        self.app_kind = applications(self.settings)
        self.version_kind = application_versions(self.settings)

    def update_app_status(self, selector: LabelSelector) -> int:
        """Mark every selected application active."""
        stage = "update app status"
        apps = self._list(stage, self.app_kind, selector)
        for app in apps:
            _set_status(
                app,
                state=self.settings.active_state,
                updateTime=format_timestamp(self._now()),
            )
            self._write(stage, self.k8s.update_resource_status, self.app_kind, app,
                        f"Failed to update status for app {_name(app)}")
        return len(apps)

    def patch_app_labels(self, selector: LabelSelector, labels: dict[str, str]) -> int:
        """Merge ``labels`` into every selected application; other labels are kept."""
        stage = "update app label"
        apps = self._list(stage, self.app_kind, selector)
        for app in apps:
            metadata = app.setdefault("metadata", {})
            current = metadata.get("labels") or {}
            current.update(labels)
            metadata["labels"] = current
            self._write(stage, self.k8s.update_resource, self.app_kind, app,
                        f"Failed to update labels for app {_name(app)}")
        return len(apps)

    def update_version_status(self, selector: LabelSelector) -> int:
        """Mark every version of every selected application active."""
        stage = "update version status"
        updated = 0
        for app in self._list(stage, self.app_kind, selector):
            app_name = _name(app)
            versions = self._list(
                stage, self.version_kind, app_versions_selector(app_name, self.settings),
                what=f"versions for app {app_name}",
            )
            for version in versions:
                _set_status(
                    version,
                    updated=format_timestamp(self._now()),
                    userName=self.settings.admin_user,
                    state=self.settings.active_state,
                )
                self._write(stage, self.k8s.update_resource_status, self.version_kind, version,
                            f"Failed to update version status for app {app_name}")
                updated += 1
            logger.debug("Activated %d versions of app %s", len(versions), app_name)
        return updated

    def _list(self, stage: str, kind: ResourceKind, selector: LabelSelector, what: str = "") -> list[dict]:
        try:
            return self.k8s.list_resources(kind, selector)
        except (ApiException, HTTPError) as e:
            msg = f"Failed to list {what or kind.plural}"
            logger.error("%s: %s", msg, _api_reason(e))
            raise ReconcileError(stage, f"{msg}: {_api_reason(e)}") from e

    def _write(self, stage: str, update, kind: ResourceKind, obj: dict, msg: str) -> None:
        try:
            update(kind, obj)
        except (ApiException, HTTPError) as e:
            logger.error("%s: %s", msg, _api_reason(e))
            raise ReconcileError(stage, f"{msg}: {_api_reason(e)}") from e


def _api_reason(e: Exception) -> str:
    if isinstance(e, ApiException) and e.status:
        return f"{e.status} {e.reason}"
    return str(e)
