"""Loguru sink configuration for the CLI."""

from __future__ import annotations

import sys

from loguru import logger


def setup_logging(level: str = "WARNING") -> None:
    """Replace the default loguru sink with a stderr sink at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<level>{level: <8}</level> {name}: {message}",
    )
