"""FarmTally artifacts CLI — Typer-based command-line interface.

Provides the ``farmtally-artifacts`` command with subcommands for packaging,
verifying, listing, inspecting and pruning build artifacts.

All output uses Rich for formatted terminal display.
"""
