"""``farmtally-artifacts list`` — show stored artifacts, newest first."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from farmtally_artifacts.cli.commands._common import STORE_HELP, console, load_settings
from farmtally_artifacts.core.catalog import ArtifactCatalog


def list_cmd(
    store: Optional[Path] = typer.Option(None, "--store", "-s", help=STORE_HELP),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """List complete artifacts ordered by manifest build time, newest first."""
    settings = load_settings(store)
    artifacts = ArtifactCatalog(settings.store_path).list()

    if as_json:
        payload = [a.model_dump(mode="json") for a in artifacts]
        typer.echo(json.dumps(payload, indent=2))
        return

    if not artifacts:
        console.print("[dim]No artifacts found.[/dim]")
        return

    table = Table(title=f"Artifacts ({len(artifacts)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Version", style="green")
    table.add_column("Built at")
    table.add_column("Commit", style="dim")
    for artifact in artifacts:
        table.add_row(artifact.name, artifact.version, artifact.timestamp, artifact.commit)
    console.print(table)
