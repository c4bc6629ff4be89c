"""``farmtally-artifacts info NAME`` — show an artifact's manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from farmtally_artifacts.cli.commands._common import STORE_HELP, console, fail, load_settings
from farmtally_artifacts.core.catalog import ArtifactCatalog
from farmtally_artifacts.core.errors import ArtifactNotFoundError


def info_cmd(
    artifact_name: str = typer.Argument(..., help="Artifact to describe."),
    store: Optional[Path] = typer.Option(None, "--store", "-s", help=STORE_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print the raw manifest."),
) -> None:
    """Show provenance and components recorded in an artifact's manifest."""
    settings = load_settings(store)
    try:
        manifest = ArtifactCatalog(settings.store_path).get(artifact_name)
    except ArtifactNotFoundError as exc:
        fail(str(exc))

    if as_json:
        typer.echo(json.dumps(manifest, indent=2))
        return

    git = manifest.get("git") or {}
    build = manifest.get("build") or {}
    console.print(
        Panel(
            "\n".join([
                f"[bold]Version:[/bold]     {manifest.get('version', 'unknown')}",
                f"[bold]Built at:[/bold]    {manifest.get('timestamp', 'unknown')}",
                f"[bold]Build:[/bold]       {build.get('number', 'unknown')} "
                f"({build.get('environment', 'unknown')})",
                f"[bold]Commit:[/bold]      {git.get('commit', 'unknown')}",
                f"[bold]Branch:[/bold]      {git.get('branch', 'unknown')}",
                f"[bold]Dirty:[/bold]       {git.get('dirty', False)}",
            ]),
            title=f"[bold]{artifact_name}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    components = manifest.get("components") or []
    if components:
        table = Table(title="Components")
        table.add_column("Name", style="cyan")
        table.add_column("Path")
        table.add_column("Size", justify="right")
        table.add_column("SHA-256", style="dim")
        for c in components:
            table.add_row(
                str(c.get("name")), str(c.get("path")), str(c.get("size")), str(c.get("checksum"))
            )
        console.print(table)
