"""Logging setup for the ``dependencies`` command."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO") -> None:
    """Send log records to stderr through Rich, replacing prior handlers."""
    if isinstance(level, str):
        level = level.upper()
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
