"""Logging configuration for entmodel.

Library modules only ever call ``get_logger(__name__)``. Handlers are
installed by ``setup_logging``, which the CLI calls on startup.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "entmodel"
LEVEL_ENV_VAR = "ENTMODEL_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"


def setup_logging(level: str | None = None, console: Console | None = None) -> logging.Logger:
    """Configure the ``entmodel`` logger with a rich handler.

    Args:
        level: Logging level name. Falls back to ``ENTMODEL_LOG_LEVEL``,
            then ``WARNING``.
        console: Optional rich console to write to (defaults to stderr).

    Returns:
        The configured ``entmodel`` logger.
    """
    level_name = (level or os.environ.get(LEVEL_ENV_VAR) or DEFAULT_LEVEL).upper()
    log_level = getattr(logging, level_name, None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)
    root_logger.propagate = False

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``entmodel``."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
