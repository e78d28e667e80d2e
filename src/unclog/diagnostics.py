"""
Diagnostic channel for the logging machinery itself.

Sink failures and other operator-facing warnings go here, never to
the caller. Console sinks share loguru's logger but bind their records
with CONSOLE_EXTRA, which this module's stderr handler filters out.
"""

import os
import sys
from typing import Any

from loguru import logger as _logger

__all__ = ["logger", "CONSOLE_EXTRA", "configure_diagnostics"]

CONSOLE_EXTRA = "unclog_console"

DIAGNOSTIC_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_handler_id = None


def _not_console(record: Any) -> bool:
    return CONSOLE_EXTRA not in record["extra"]


def configure_diagnostics(level: str = "") -> None:
    """(Re)install the stderr diagnostic handler at `level`."""
    global _handler_id
    if _handler_id is not None:
        _logger.remove(_handler_id)
    _handler_id = _logger.add(
        sys.stderr,
        level=level or os.environ.get("UNCLOG_DIAGNOSTIC_LEVEL", "WARNING"),
        format=DIAGNOSTIC_FORMAT,
        filter=_not_console,
    )


# Remove default handler
_logger.remove()
configure_diagnostics()

logger: Any = _logger
