"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from catalog_importer.models import EntryOutcome
from catalog_importer.models.catalog import ImportReport, StageResult, UploadSummary
from catalog_importer.models.chart import ChartIndexEntry

console = Console()


def _summary_to_dict(summary: UploadSummary) -> dict[str, Any]:
    return {
        "uploaded": summary.uploaded,
        "failed": summary.failed,
        "skipped": summary.skipped,
        "packages": [
            {
                "name": p.name,
                "app_id": p.app_id,
                "entries": [
                    {"version": e.version, "outcome": e.outcome.value, "reason": e.reason}
                    for e in p.entries
                ],
            }
            for p in summary.packages
        ],
    }


def _stages_to_list(stages: list[StageResult]) -> list[dict[str, Any]]:
    return [{"stage": s.position, "name": s.name, "updated": s.updated} for s in stages]


def _dump(data: Any, fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2))
    else:
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))


def output_import_report(report: ImportReport, fmt: str) -> None:
    if fmt in ("json", "yaml"):
        _dump({"uploads": _summary_to_dict(report.uploads), "stages": _stages_to_list(report.stages)}, fmt)
        return

    from catalog_importer.output.tables import failures_table, stage_table, upload_summary_table
    uploads = report.uploads
    console.print(upload_summary_table(uploads))
    if uploads.failed:
        console.print(failures_table(uploads))
    if report.stages:
        console.print(stage_table(report.stages))
    console.print(
        f"\n[green]{uploads.uploaded} chart(s) uploaded[/green], "
        f"[red]{uploads.failed} failed[/red], "
        f"[dim]{uploads.skipped} skipped[/dim] "
        f"({uploads.applications_created} application(s) created)"
    )


def output_stages(stages: list[StageResult], fmt: str) -> None:
    if fmt in ("json", "yaml"):
        _dump(_stages_to_list(stages), fmt)
        return

    from catalog_importer.output.tables import stage_table
    console.print(stage_table(stages))


def output_preview(plan: dict[str, list[tuple[ChartIndexEntry, EntryOutcome]]], fmt: str) -> None:
    if fmt in ("json", "yaml"):
        data = {
            name: [{"version": e.version, "url": e.url, "action": o.value} for e, o in entries]
            for name, entries in plan.items()
        }
        _dump(data, fmt)
        return

    from catalog_importer.output.tables import preview_table
    console.print(preview_table(plan))
    selected = sum(1 for entries in plan.values() for _, o in entries if o is EntryOutcome.UPLOADED)
    console.print(f"\n[cyan]{selected} chart(s) from {len(plan)} package(s) would be uploaded[/cyan]")
