"""catalog-import preview - Show what an import would upload."""

from __future__ import annotations

import typer
from rich.console import Console

from catalog_importer.cli.options import LimitOption, OutputOption, RepoOption
from catalog_importer.core.chart_uploader import plan_package
from catalog_importer.core.index_fetcher import fetch_index
from catalog_importer.errors import CatalogImportError
from catalog_importer.output.formatters import output_preview

app = typer.Typer()
console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def preview(
    repo: str = RepoOption,
    limit: int = LimitOption,
    output: str = OutputOption,
) -> None:
    """Fetch the index and list the versions an import would try, without uploading."""
    try:
        index = fetch_index(repo)
    except CatalogImportError as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        raise typer.Exit(code=1)

    plan = {name: plan_package(entries, limit) for name, entries in index.items()}
    output_preview(plan, output)
