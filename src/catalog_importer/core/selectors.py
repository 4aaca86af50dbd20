"""Resource kinds and label selectors shared by the reconciliation stages."""

from __future__ import annotations

from catalog_importer.config.settings import Settings, settings as default_settings
from catalog_importer.models import LabelSelector, ResourceKind


def applications(settings: Settings | None = None) -> ResourceKind:
    s = settings or default_settings
    return ResourceKind(group=s.api_group, version=s.api_version, plural="applications")


def application_versions(settings: Settings | None = None) -> ResourceKind:
    s = settings or default_settings
    return ResourceKind(group=s.api_group, version=s.api_version, plural="applicationversions")


def sentinel_selector(settings: Settings | None = None) -> LabelSelector:
    """Select the applications created by this run (before the final relabel)."""
    s = settings or default_settings
    return LabelSelector(key=s.category_label, value=s.sentinel_category)


def app_versions_selector(app_name: str, settings: Settings | None = None) -> LabelSelector:
    s = settings or default_settings
    return LabelSelector(key=s.app_id_label, value=app_name)
