"""Main Typer application — imports and registers all CLI commands.

Entry point: ``farmtally-artifacts`` (configured via pyproject.toml scripts).

Commands: package, verify, list, prune, info, validate.
"""

from __future__ import annotations

from typing import Optional

import typer

from farmtally_artifacts.cli.commands.info import info_cmd
from farmtally_artifacts.cli.commands.list_cmd import list_cmd
from farmtally_artifacts.cli.commands.package import package_cmd
from farmtally_artifacts.cli.commands.prune import prune_cmd
from farmtally_artifacts.cli.commands.validate import validate_cmd
from farmtally_artifacts.cli.commands.verify import verify_cmd
from farmtally_artifacts.config import get_settings
from farmtally_artifacts.log import configure_logging

app = typer.Typer(
    name="farmtally-artifacts",
    help="FarmTally build-artifact lifecycle manager: package, verify, list and prune.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: FARMTALLY_ARTIFACTS_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level or get_settings().log_level)


# Register subcommands
app.command(name="package", help="Package the current build as a versioned artifact.")(package_cmd)
app.command(name="verify", help="Verify an artifact's component checksums.")(verify_cmd)
app.command(name="list", help="List stored artifacts, newest first.")(list_cmd)
app.command(name="prune", help="Apply the age- and count-based retention policy.")(prune_cmd)
app.command(name="info", help="Show an artifact's manifest.")(info_cmd)
app.command(name="validate", help="Check packaging prerequisites.")(validate_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
