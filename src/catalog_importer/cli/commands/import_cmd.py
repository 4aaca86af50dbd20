"""catalog-import import - Upload charts and reconcile the catalog."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console

from catalog_importer.cli.options import ContextOption, LimitOption, OutputOption, RepoOption
from catalog_importer.config.settings import ImportConfig, read_token, settings
from catalog_importer.core.catalog_client import CatalogClient
from catalog_importer.core.chart_uploader import ChartUploader
from catalog_importer.core.k8s_client import K8sClient
from catalog_importer.core.pipeline import ImportPipeline
from catalog_importer.errors import CatalogImportError
from catalog_importer.output.formatters import output_import_report

app = typer.Typer()
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def resolve_token(token: str | None) -> str:
    """Return the given token, or read the service account token file."""
    if token:
        return token
    path = settings.token_file
    logger.info("Using token from %s", path)
    try:
        return read_token(path)
    except OSError as e:
        console.print(f"[red bold]Failed to read token file:[/red bold] {e}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def import_charts(
    server: str = typer.Option(..., "--server", help="KubeSphere server URL"),
    repo: str = RepoOption,
    token: Optional[str] = typer.Option(None, "--token", help="Bearer token (default: service account token)"),
    limit: int = LimitOption,
    context: Optional[str] = ContextOption,
    output: str = OutputOption,
) -> None:
    """Import every chart of a Helm repository and publish it in the app store."""
    config = ImportConfig(
        server_url=server,
        repo_url=repo,
        token=resolve_token(token),
        limit=limit,
        context=context,
    )
    catalog = CatalogClient(config.server_url, config.token, settings=settings)
    pipeline = ImportPipeline(
        config,
        k8s=K8sClient(context=config.context, settings=settings),
        uploader=ChartUploader(catalog, limit=config.limit, settings=settings),
        settings=settings,
    )

    try:
        report = pipeline.run()
    except CatalogImportError as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        raise typer.Exit(code=1)

    output_import_report(report, output)
