"""Logging setup for command-line use.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by the CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "farmtally_artifacts"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stderr ``RichHandler`` to the package logger at *level*."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger
