"""``farmtally-artifacts prune`` — apply the retention policy to the store.

Age-based eviction runs first, then count-based eviction. Every decision is
printed with its reason; a failed deletion is reported and the exit code is
1, but the remaining artifacts are still processed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from farmtally_artifacts.cli.commands._common import STORE_HELP, console, load_settings
from farmtally_artifacts.core.retention import RetentionEnforcer


def prune_cmd(
    store: Optional[Path] = typer.Option(None, "--store", "-s", help=STORE_HELP),
    retention_days: Optional[int] = typer.Option(
        None, "--retention-days", "-d", min=0, help="Evict artifacts older than this (default 30)."
    ),
    max_artifacts: Optional[int] = typer.Option(
        None, "--max-artifacts", "-m", min=0, help="Keep at most this many artifacts (default 50)."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show decisions without deleting."),
) -> None:
    """Evict stale artifacts by age, then by count."""
    settings = load_settings(store)
    config = settings.retention_config(
        retention_days=retention_days,
        max_artifacts=max_artifacts,
        dry_run=dry_run,
    )
    report = RetentionEnforcer(settings.store_path).apply_retention_policy(config)

    if report.decisions:
        title = "Eviction plan (dry run)" if report.dry_run else "Evicted artifacts"
        table = Table(title=title)
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Reason")
        table.add_column("Age (days)", justify="right")
        for decision in report.decisions:
            table.add_row(decision.name, decision.reason.value, f"{decision.age_days:.1f}")
        console.print(table)
    else:
        console.print("[dim]Nothing to evict.[/dim]")

    for name in report.skipped:
        console.print(f"[yellow]Skipped {escape(name)}: packaging in progress[/yellow]", soft_wrap=True)
    for error in report.errors:
        console.print(f"[red]Failed to remove {escape(error)}[/red]", soft_wrap=True)

    console.print(
        f"[bold]{report.remaining}[/bold] artifact(s) remaining "
        f"(retention {config.retention_days} days, max {config.max_artifacts})."
    )
    if report.errors:
        raise typer.Exit(code=1)
