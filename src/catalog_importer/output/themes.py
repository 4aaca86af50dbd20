"""Outcome color maps."""

from catalog_importer.models import EntryOutcome

OUTCOME_COLORS: dict[EntryOutcome, str] = {
    EntryOutcome.UPLOADED: "green",
    EntryOutcome.DOWNLOAD_FAILED: "red bold",
    EntryOutcome.UPLOAD_FAILED: "red bold",
    EntryOutcome.SKIPPED_LIMIT: "dim",
    EntryOutcome.SKIPPED_DEPRECATED: "yellow",
}


def styled_outcome(outcome: EntryOutcome) -> str:
    color = OUTCOME_COLORS.get(outcome, "white")
    return f"[{color}]{outcome.value}[/{color}]"


def styled_count(count: int, color: str) -> str:
    if not count:
        return "[dim]0[/dim]"
    return f"[{color}]{count}[/{color}]"
