"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="catalog-import",
    help="Import Helm chart repositories into the KubeSphere application catalog.",
    no_args_is_help=True,
)


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich, HH:MM:SS timestamps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose, markup=False)],
        force=True,
    )
    # kubernetes/urllib3 debug output is noise even in verbose mode
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("kubernetes").setLevel(logging.WARNING)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)


def _register_commands() -> None:
    from catalog_importer.cli.commands.import_cmd import app as import_app
    from catalog_importer.cli.commands.reconcile_cmd import app as reconcile_app
    from catalog_importer.cli.commands.preview_cmd import app as preview_app

    app.add_typer(import_app, name="import", help="Upload charts and publish them in the catalog")
    app.add_typer(reconcile_app, name="reconcile", help="Publish records left by an interrupted import")
    app.add_typer(preview_app, name="preview", help="Show which charts an import would upload")


_register_commands()


def main() -> None:
    app()
