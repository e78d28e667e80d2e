from __future__ import annotations

from pathlib import Path
from typing import Optional


class UnclogError(Exception):
    pass


class InvalidLogEntryError(UnclogError, ValueError):
    pass


class SinkError(UnclogError):
    """
    A log entry could not be persisted.

    The underlying OSError, when there is one, is chained as __cause__.
    """

    def __init__(self, identifier: str, reason: str, path: Optional[Path] = None):
        self.identifier = identifier
        self.reason = reason
        self.path = path
        super().__init__(reason)


class DirectoryCreateError(SinkError):
    pass


class SinkWriteError(SinkError):
    pass
