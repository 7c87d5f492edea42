"""Package logger shared by every alias_registry module."""

from __future__ import annotations

import logging

logger = logging.getLogger("alias_registry")
logger.addHandler(logging.NullHandler())


def enable_verbose_logging() -> None:
    """Route debug output to stderr through rich (``--verbose``)."""
    from rich.logging import RichHandler

    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
