"""Shared CLI options."""

from __future__ import annotations

import typer

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
RepoOption = typer.Option(..., "--repo", help="Helm repository (or index.yaml) URL")
LimitOption = typer.Option(1, "--limit", min=1, help="Number of versions imported per chart")
