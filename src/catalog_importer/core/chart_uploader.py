"""Download charts from an index and upload them to the catalog."""

from __future__ import annotations

import logging
import time
from typing import Callable

import requests

from catalog_importer.config.settings import Settings, settings as default_settings
from catalog_importer.core.catalog_client import CatalogClient
from catalog_importer.errors import CatalogAPIError
from catalog_importer.models import EntryOutcome
from catalog_importer.models.catalog import PackageReport, UploadRequest, UploadSummary
from catalog_importer.models.chart import ChartIndex, ChartIndexEntry
from catalog_importer.utils.encoding import encode_chart

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class ChartUploader:
    """Imports up to ``limit`` versions of every package in an index.

    Failures on a single chart are logged and recorded in the report; the
    uploader moves on to the next entry and never aborts the run.
    """

    def __init__(
        self,
        catalog: CatalogClient,
        limit: int = 1,
        settings: Settings | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.catalog = catalog
        self.limit = limit
        self.settings = settings or default_settings
        # Chart downloads go to third-party hosts; never send the catalog token there
        self.session = session or requests.Session()
        self._sleep = sleep

    def upload_index(
        self,
        index: ChartIndex,
        on_progress: ProgressCallback | None = None,
    ) -> UploadSummary:
        summary = UploadSummary()
        total = len(index)
        for i, (name, entries) in enumerate(index.items(), 1):
            if on_progress:
                on_progress(i, total, name)
            summary.packages.append(self.upload_package(name, entries))

        logger.info(
            "Upload finished: %d uploaded, %d failed, %d skipped across %d packages",
            summary.uploaded, summary.failed, summary.skipped, len(summary.packages),
        )
        return summary

    def upload_package(self, name: str, entries: list[ChartIndexEntry]) -> PackageReport:
        report = PackageReport(name=name)
        success = 0

        for pos, entry in enumerate(entries):
            if entry.deprecated:
                logger.warning("App %s is deprecated, skip", entry.ref)
                for rest in entries[pos:]:
                    report.record(rest.version, EntryOutcome.SKIPPED_DEPRECATED, f"{entry.version} is deprecated")
                break

            payload = self._download(entry, report)
            if payload is None:
                continue

            if not self._upload(entry, payload, report):
                continue

            success += 1
            if success >= self.limit:
                for rest in entries[pos + 1:]:
                    report.record(rest.version, EntryOutcome.SKIPPED_LIMIT, f"limit of {self.limit} reached")
                break

            self._sleep(self.settings.upload_delay)

        return report

    def _download(self, entry: ChartIndexEntry, report: PackageReport) -> bytes | None:
        try:
            resp = self.session.get(entry.url, timeout=self.settings.download_timeout)
        except requests.RequestException as e:
            logger.error("Failed to fetch chart %s, %s", entry.ref, e)
            report.record(entry.version, EntryOutcome.DOWNLOAD_FAILED, str(e))
            return None

        if not resp.ok:
            logger.error("Failed to fetch chart %s, status code: %d", entry.ref, resp.status_code)
            report.record(entry.version, EntryOutcome.DOWNLOAD_FAILED, f"status code {resp.status_code}")
            return None
        return resp.content

    def _upload(self, entry: ChartIndexEntry, payload: bytes, report: PackageReport) -> bool:
        request = UploadRequest(
            package=encode_chart(payload),
            category_name=self.settings.sentinel_category,
            repo_name=self.settings.repo_name,
            workspace=self.settings.workspace,
            app_type=self.settings.app_type,
        )
        try:
            if report.app_id:
                self.catalog.add_version(report.app_id, request)
            else:
                app_name = self.catalog.create_app(request)
                if app_name:
                    report.app_id = app_name
                else:
                    logger.warning("Catalog did not return an app name for %s", entry.ref)
        except CatalogAPIError as e:
            logger.error("Failed to post app %s, status code: %d", entry.ref, e.status_code)
            report.record(entry.version, EntryOutcome.UPLOAD_FAILED, str(e))
            return False
        except requests.RequestException as e:
            logger.error("Failed to post app version %s %s", entry.ref, e)
            report.record(entry.version, EntryOutcome.UPLOAD_FAILED, str(e))
            return False

        logger.info("App %s posted successfully", entry.ref)
        report.record(entry.version, EntryOutcome.UPLOADED)
        return True


def plan_package(entries: list[ChartIndexEntry], limit: int) -> list[tuple[ChartIndexEntry, EntryOutcome]]:
    """Predict per-entry outcomes assuming every download and upload succeeds."""
    plan: list[tuple[ChartIndexEntry, EntryOutcome]] = []
    deprecated = False
    for entry in entries:
        if entry.deprecated:
            deprecated = True
        if deprecated:
            plan.append((entry, EntryOutcome.SKIPPED_DEPRECATED))
        elif sum(1 for _, o in plan if o is EntryOutcome.UPLOADED) >= limit:
            plan.append((entry, EntryOutcome.SKIPPED_LIMIT))
        else:
            plan.append((entry, EntryOutcome.UPLOADED))
    return plan
