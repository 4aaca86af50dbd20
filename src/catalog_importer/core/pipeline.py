"""Import pipeline: fetch index, upload charts, reconcile catalog records."""

from __future__ import annotations

import logging
from typing import Callable

from catalog_importer.config.settings import ImportConfig, Settings, settings as default_settings
from catalog_importer.core.chart_uploader import ChartUploader, ProgressCallback
from catalog_importer.core.index_fetcher import fetch_index
from catalog_importer.core.k8s_client import K8sClient
from catalog_importer.core.reconciler import CatalogReconciler
from catalog_importer.core.selectors import sentinel_selector
from catalog_importer.errors import ReconcileError, StageFailed
from catalog_importer.models.catalog import ImportReport, StageResult
from catalog_importer.models.chart import ChartIndex

logger = logging.getLogger(__name__)

IndexFetcher = Callable[[str], ChartIndex]


def run_reconcile_stages(
    reconciler: CatalogReconciler,
    settings: Settings | None = None,
) -> list[StageResult]:
    """Run the four publishing stages against the sentinel selector.

    Stops at the first failing stage and raises StageFailed; later stages
    are not attempted.
    """
    s = settings or default_settings
    selector = sentinel_selector(s)
    store = {s.store_label: "true"}
    category = {s.category_label: s.default_category}

    # The category relabel retires the sentinel label, so it must stay last
    stages: list[tuple[str, Callable[[], int]]] = [
        ("updateAppStatus", lambda: reconciler.update_app_status(selector)),
        ("updateAppLabel store", lambda: reconciler.patch_app_labels(selector, store)),
        ("updateVersionStatus", lambda: reconciler.update_version_status(selector)),
        ("updateAppLabel categoryName", lambda: reconciler.patch_app_labels(selector, category)),
    ]

    results: list[StageResult] = []
    total = len(stages)
    for position, (name, stage) in enumerate(stages, 1):
        try:
            updated = stage()
        except ReconcileError as e:
            logger.error("[%d/%d] %s failed: %s", position, total, name, e)
            raise StageFailed(position, total, name, e) from e
        logger.info("[%d/%d] %s completed successfully (%d updated)", position, total, name, updated)
        results.append(StageResult(position=position, name=name, updated=updated))
    return results


class ImportPipeline:
    """Runs the import stages strictly in order, stopping at the first fatal failure."""

    def __init__(
        self,
        config: ImportConfig,
        k8s: K8sClient,
        uploader: ChartUploader,
        fetch: IndexFetcher = fetch_index,
        settings: Settings | None = None,
        reconciler: CatalogReconciler | None = None,
    ):
        self.config = config
        self.k8s = k8s
        self.uploader = uploader
        self.settings = settings or default_settings
        self.reconciler = reconciler or CatalogReconciler(k8s, self.settings)
        self._fetch = fetch

    def run(self, on_progress: ProgressCallback | None = None) -> ImportReport:
        """Connect, fetch the index, upload every package, then reconcile.

        Raises ClientInitError, IndexUnavailable or IndexParseError before any
        upload, and StageFailed if a reconciliation stage fails.
        """
        logger.info("Starting to upload to %s", self.config.server_url)
        self.k8s.connect()

        index = self._fetch(self.config.repo_url)
        report = ImportReport()
        report.uploads = self.uploader.upload_index(index, on_progress=on_progress)
        report.stages = run_reconcile_stages(self.reconciler, self.settings)
        return report
