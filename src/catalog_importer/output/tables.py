"""Rich table builders for each command."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from catalog_importer.models import EntryOutcome
from catalog_importer.models.catalog import StageResult, UploadSummary
from catalog_importer.models.chart import ChartIndexEntry
from catalog_importer.output.themes import styled_count, styled_outcome


def upload_summary_table(summary: UploadSummary) -> Table:
    table = Table(title="Chart Uploads", expand=True)
    table.add_column("Package", style="magenta", no_wrap=True)
    table.add_column("Application", style="cyan", no_wrap=True)
    table.add_column("Uploaded", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Versions", style="dim")

    for p in summary.packages:
        versions = ", ".join(e.version for e in p.entries if e.outcome is EntryOutcome.UPLOADED)
        table.add_row(
            p.name,
            p.app_id or "-",
            styled_count(p.uploaded, "green"),
            styled_count(p.failed, "red bold"),
            styled_count(p.skipped, "yellow"),
            versions or "-",
        )
    return table


def failures_table(summary: UploadSummary) -> Table:
    table = Table(title="Failed Charts", expand=True)
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Outcome", no_wrap=True)
    table.add_column("Reason")

    for p in summary.packages:
        for e in p.entries:
            if e.outcome.is_failure:
                table.add_row(f"{p.name}:{e.version}", styled_outcome(e.outcome), escape(e.reason))
    return table


def stage_table(stages: list[StageResult], total: int = 4) -> Table:
    table = Table(title="Reconciliation", expand=True)
    table.add_column("Stage", justify="right", style="dim", no_wrap=True)
    table.add_column("Name", style="bold white")
    table.add_column("Updated", justify="right")

    for s in stages:
        table.add_row(f"{s.position}/{total}", s.name, str(s.updated))
    return table


def preview_table(plan: dict[str, list[tuple[ChartIndexEntry, EntryOutcome]]]) -> Table:
    table = Table(title="Import Preview", expand=True)
    table.add_column("Package", style="magenta", no_wrap=True)
    table.add_column("Version", style="bold")
    table.add_column("App Ver", style="cyan")
    table.add_column("Action", no_wrap=True)

    for name, entries in plan.items():
        for entry, outcome in entries:
            table.add_row(name, entry.version, entry.app_version or "-", styled_outcome(outcome))
    return table
