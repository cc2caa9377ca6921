"""Logging setup shared by every module in the package.

Modules call ``get_logger(__name__)`` at import time; the CLI calls
``configure_logging`` once to attach a rich handler at the requested level.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "schema_generate"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Attach a single rich handler to the package logger.

    Args:
        level: Name of the minimum level to emit.
        console: Console to write to; log output goes to stderr by default.
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    root.setLevel(level.upper())

    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.propagate = False
