"""Centralized logging configuration for postfeed."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final, cast

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["console", "configure_logging"]

_LOG_LEVEL_ENV: Final[str] = "POSTFEED_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)

if TYPE_CHECKING:
    class _ManagedRichHandler(RichHandler):
        _postfeed_managed: bool
else:
    _ManagedRichHandler = RichHandler


def _resolve_level(level: int | str | None = None) -> int:
    """Return the requested logging level, falling back to the environment."""

    if isinstance(level, int):
        return level
    level_name = (level or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: int | str | None = None) -> None:
    """Configure logging once with a Rich handler."""

    root_logger = logging.getLogger()

    managed_handler: _ManagedRichHandler | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_postfeed_managed", False):
            managed_handler = cast(_ManagedRichHandler, handler)
            break

    if managed_handler is None:
        root_logger.handlers.clear()
        handler = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._postfeed_managed = True
        root_logger.addHandler(handler)

    root_logger.setLevel(_resolve_level(level))
    logging.captureWarnings(True)
