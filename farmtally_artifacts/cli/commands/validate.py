"""``farmtally-artifacts validate`` — check that ``package`` could succeed.

Reports tool availability, store writability and build-output presence.
Exit code 1 if any required check fails.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from farmtally_artifacts.cli.commands._common import ROOT_HELP, STORE_HELP, console, load_settings
from farmtally_artifacts.core.environment import check_readiness
from farmtally_artifacts.core.packager import ComponentPackager


def validate_cmd(
    store: Optional[Path] = typer.Option(None, "--store", "-s", help=STORE_HELP),
    project_root: Optional[Path] = typer.Option(None, "--root", "-r", help=ROOT_HELP),
) -> None:
    """Check packaging prerequisites without writing an artifact."""
    settings = load_settings(store, project_root)
    specs = ComponentPackager(settings.project_root, settings.frontend_dir).specs()
    checks = check_readiness(settings.project_root, settings.store_path, specs)

    table = Table(title="Packaging readiness")
    table.add_column("Check", style="cyan")
    table.add_column("Result", justify="center")
    table.add_column("Detail")
    for check in checks:
        if check.passed:
            status = "[green]OK[/green]"
        elif check.required:
            status = "[bold red]FAIL[/bold red]"
        else:
            status = "[yellow]WARN[/yellow]"
        table.add_row(check.name, status, check.detail)
    console.print(table)

    if any(c.required and not c.passed for c in checks):
        console.print("[bold red]Not ready to package.[/bold red]")
        raise typer.Exit(code=1)
    console.print("[bold green]Ready to package.[/bold green]")
