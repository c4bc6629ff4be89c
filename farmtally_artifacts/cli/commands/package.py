"""``farmtally-artifacts package`` — package the current build into the store.

Resolves the build identity, allocates the artifact directory, archives the
backend and frontend concurrently, then writes the manifest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from farmtally_artifacts.cli.commands._common import ROOT_HELP, STORE_HELP, console, fail, load_settings
from farmtally_artifacts.core.errors import ArtifactError
from farmtally_artifacts.core.pipeline import ArtifactPipeline


def package_cmd(
    store: Optional[Path] = typer.Option(None, "--store", "-s", help=STORE_HELP),
    project_root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
    build_number: Optional[str] = typer.Option(
        None, "--build-number", "-b", help="Override BUILD_NUMBER."
    ),
    environment: Optional[str] = typer.Option(
        None, "--env", "-e", help="Override BUILD_ENV (default: production)."
    ),
) -> None:
    """Package backend and frontend build outputs as a versioned artifact.

    Fails with the exact missing path if a build output directory is absent;
    no manifest is written in that case.
    """
    settings = load_settings(
        store,
        project_root,
        build_number=build_number,
        build_environment=environment,
    )
    pipeline = ArtifactPipeline(settings)

    try:
        result = pipeline.run()
    except ArtifactError as exc:
        fail(str(exc))

    manifest = result.manifest
    table = Table(title="Components")
    table.add_column("Name", style="cyan")
    table.add_column("Path")
    table.add_column("Size", justify="right")
    table.add_column("SHA-256", style="dim")
    for component in manifest.components:
        table.add_row(component.name, component.path, str(component.size), component.checksum)

    console.print()
    console.print(
        Panel(
            "\n".join([
                "[bold green]Artifact packaged![/bold green]",
                "",
                f"[bold]Name:[/bold]      {manifest.name}",
                f"[bold]Version:[/bold]   {manifest.version}",
                f"[bold]Commit:[/bold]    {manifest.git.commit}",
                f"[bold]Branch:[/bold]    {manifest.git.branch}",
                f"[bold]Built at:[/bold]  {manifest.timestamp}",
                f"[bold]Location:[/bold]  {result.artifact_root}",
            ]),
            title="[bold]FarmTally Artifacts[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
    console.print(table)

    # Print the artifact name plainly for scripting
    console.print(manifest.name, soft_wrap=True)
