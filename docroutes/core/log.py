"""Logging setup for the command line.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers. The CLI calls ``setup_logging`` once, which routes the
``docroutes`` logger through rich on stderr.

Environment::

    DOCROUTES_LOG_LEVEL=debug|info|warning|error|off (default: warning)
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_NAME_TO_LEVEL = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 10,
}

DEFAULT_LEVEL = "warning"


def parse_level(name: str | None) -> int:
    """Map a level name to a logging level, falling back to the default."""
    if not name:
        name = os.environ.get("DOCROUTES_LOG_LEVEL", DEFAULT_LEVEL)
    return _NAME_TO_LEVEL.get(name.strip().lower(), _NAME_TO_LEVEL[DEFAULT_LEVEL])


def setup_logging(level: str | None = None, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the package logger. Safe to call repeatedly."""
    logger = logging.getLogger("docroutes")
    logger.setLevel(parse_level(level))
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
