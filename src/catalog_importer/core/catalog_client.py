"""KubeSphere catalog ingestion API wrapper."""

from __future__ import annotations

import logging

import requests

from catalog_importer.config.settings import Settings, settings as default_settings
from catalog_importer.errors import CatalogAPIError
from catalog_importer.models.catalog import UploadRequest

logger = logging.getLogger(__name__)


class CatalogClient:
    """Thin wrapper around the application catalog REST endpoints."""

    def __init__(
        self,
        server_url: str,
        token: str,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ):
        self.settings = settings or default_settings
        self.server_url = server_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        })

    @property
    def apps_url(self) -> str:
        return f"{self.server_url}{self.settings.catalog_api_prefix}/apps"

    def versions_url(self, app_name: str) -> str:
        return f"{self.apps_url}/{app_name}/versions"

    def create_app(self, request: UploadRequest) -> str:
        """Create a new application from a chart and return its name (may be empty)."""
        data = self._post(self.apps_url, request)
        return data.get("appName", "")

    def add_version(self, app_name: str, request: UploadRequest) -> dict:
        """Attach a chart as a new version of an existing application."""
        return self._post(self.versions_url(app_name), request)

    def _post(self, url: str, request: UploadRequest) -> dict:
        resp = self.session.post(url, json=request.to_dict(), timeout=self.settings.api_timeout)
        if not resp.ok:
            raise CatalogAPIError(url, resp.status_code, resp.text.strip())
        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError:
            logger.debug("Non-JSON response from %s", url, exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}
