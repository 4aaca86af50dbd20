"""catalog-import reconcile - Run only the publishing stages."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from catalog_importer.cli.options import ContextOption, OutputOption
from catalog_importer.config.settings import settings
from catalog_importer.core.k8s_client import K8sClient
from catalog_importer.core.reconciler import CatalogReconciler
from catalog_importer.core.pipeline import run_reconcile_stages
from catalog_importer.errors import CatalogImportError
from catalog_importer.output.formatters import output_stages

app = typer.Typer()
console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def reconcile(
    context: Optional[str] = ContextOption,
    output: str = OutputOption,
) -> None:
    """Activate and relabel applications still carrying the import category."""
    k8s = K8sClient(context=context, settings=settings)
    try:
        k8s.connect()
        stages = run_reconcile_stages(CatalogReconciler(k8s, settings), settings)
    except CatalogImportError as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        raise typer.Exit(code=1)

    output_stages(stages, output)
