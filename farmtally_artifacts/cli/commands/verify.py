"""``farmtally-artifacts verify NAME`` — check component checksums.

Exit code 0 iff every component archive matches its stored checksum;
otherwise 1, with every accumulated error printed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from farmtally_artifacts.cli.commands._common import STORE_HELP, console, fail, load_settings
from farmtally_artifacts.core.errors import ArtifactNotFoundError
from farmtally_artifacts.core.verifier import ArtifactVerifier


def verify_cmd(
    artifact_name: str = typer.Argument(..., help="Artifact to verify, e.g. farmtally-v123-a1b2c3d4."),
    store: Optional[Path] = typer.Option(None, "--store", "-s", help=STORE_HELP),
) -> None:
    """Verify the integrity of a stored artifact."""
    settings = load_settings(store)
    verifier = ArtifactVerifier(settings.store_path)

    try:
        result = verifier.verify(artifact_name)
    except ArtifactNotFoundError as exc:
        fail(str(exc))

    if result.is_valid:
        console.print(f"[bold green]{escape(artifact_name)}: valid[/bold green]", soft_wrap=True)
        return

    console.print(
        f"[bold red]{escape(artifact_name)}: {len(result.errors)} integrity error(s)[/bold red]",
        soft_wrap=True,
    )
    for error in result.errors:
        console.print(f"  [red]- {escape(error)}[/red]", soft_wrap=True)
    raise typer.Exit(code=1)
