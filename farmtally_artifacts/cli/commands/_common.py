"""Shared option handling and output helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from farmtally_artifacts.config import ArtifactSettings, get_settings

console = Console()

STORE_HELP = "Artifact store directory (default: FARMTALLY_ARTIFACTS_STORE_PATH or ./artifacts)."
ROOT_HELP = "Project root containing the build outputs (default: current directory)."


def load_settings(
    store: Path | None = None, project_root: Path | None = None, **overrides: object
) -> ArtifactSettings:
    """Environment settings with CLI options layered on top."""
    return get_settings(store_path=store, project_root=project_root, **overrides)


def fail(message: str, code: int = 1) -> NoReturn:
    """Print *message* verbatim in red and exit with *code*."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
    raise typer.Exit(code=code)
