"""logging_wrapper.py

Process-wide logging functions.

Every module can log consistently without wiring a LogManager:

    from unclog.logging_wrapper import info, error

    info("Service started", {"port": 8080})
    error("Upload failed", {"file": name}, severity="Critical")

All functions share one LogManager built on first use over
GLOBAL_CONFIGURATION, so changes made through that configuration apply
to the next emission.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from unclog.configuration import GLOBAL_CONFIGURATION
from unclog.log_manager import LogManager

_manager: Optional[LogManager] = None
_lock = threading.RLock()


def get_manager() -> LogManager:
    global _manager
    with _lock:
        if _manager is None:
            _manager = LogManager(GLOBAL_CONFIGURATION)
        return _manager


def reset_manager() -> None:
    """Drop the shared manager; the next call builds a fresh one."""
    global _manager
    with _lock:
        if _manager is not None:
            _manager.close()
        _manager = None


def emit(head: str, body: Any = None, **kwargs: Any) -> None:
    get_manager().emit(head, body, **kwargs)


def success(head: str, body: Any = None, **kwargs: Any) -> None:
    get_manager().success(head, body, **kwargs)


def info(head: str, body: Any = None, **kwargs: Any) -> None:
    get_manager().info(head, body, **kwargs)


def warning(head: str, body: Any = None, **kwargs: Any) -> None:
    get_manager().warning(head, body, **kwargs)


def error(head: str, body: Any = None, **kwargs: Any) -> None:
    get_manager().error(head, body, **kwargs)


def debug(head: str, body: Any = None, **kwargs: Any) -> None:
    get_manager().debug(head, body, **kwargs)
