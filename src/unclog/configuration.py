"""
Module: configuration.py

Process-wide key/value configuration for emitters and sinks.

Reads never fail: every lookup carries a fallback. There is no locking;
the last writer wins, so hosts that mutate configuration from several
threads must synchronize those writes themselves.
"""

from __future__ import annotations

import os
from types import MappingProxyType
from typing import Any, Mapping, Optional

SHOW_LOGS = "ShowLogs"
WRITE_LOGS = "WriteLogs"
LOG_PATH = "LogPath"
DIRECTORY = "Directory"  # older name of LogPath
APPLICATION_NAME = "ApplicationName"
VERSION = "Version"

FALLBACK_APPLICATION_NAME = "unclog"
FALLBACK_LOG_PATH = "logs"

DEFAULT_CONFIGURATION = {
    VERSION: "1.0",
    SHOW_LOGS: True,
    WRITE_LOGS: True,
    LOG_PATH: FALLBACK_LOG_PATH,
    APPLICATION_NAME: FALLBACK_APPLICATION_NAME,
}

# Environment variables honored by Configuration.from_environ
ENVIRON_KEYS = {
    "UNCLOG_SHOW_LOGS": SHOW_LOGS,
    "UNCLOG_WRITE_LOGS": WRITE_LOGS,
    "UNCLOG_LOG_PATH": LOG_PATH,
    "UNCLOG_APPLICATION_NAME": APPLICATION_NAME,
}

_TRUTHY = {"1", "true", "yes", "on"}


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class Configuration:
    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._values: dict[str, Any] = dict(
            DEFAULT_CONFIGURATION if initial is None else initial
        )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Stored value for `key`, else `default` when one was supplied
        (neither None nor ""), else None.
        """
        if key in self._values:
            return self._values[key]
        if default is None or default == "":
            return None
        return default

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def set_all(self, values: Mapping[str, Any]) -> None:
        # Single assignment: readers see the old map or the new one
        self._values = dict(values)

    def get_all(self) -> Mapping[str, Any]:
        """Read-only live view of the current map."""
        return MappingProxyType(self._values)

    @property
    def show_logs(self) -> bool:
        return _as_flag(self.get(SHOW_LOGS, True))

    @property
    def write_logs(self) -> bool:
        return _as_flag(self.get(WRITE_LOGS, True))

    @property
    def application_name(self) -> str:
        return self.get(APPLICATION_NAME) or FALLBACK_APPLICATION_NAME

    @property
    def log_directory(self) -> str:
        return self.get(LOG_PATH) or self.get(DIRECTORY) or FALLBACK_LOG_PATH

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "Configuration":
        """
        Defaults overridden by the UNCLOG_* environment variables.
        """
        environ = os.environ if environ is None else environ
        config = cls()
        for variable, key in ENVIRON_KEYS.items():
            raw = environ.get(variable)
            if raw is None or raw == "":
                continue
            if key in (SHOW_LOGS, WRITE_LOGS):
                config.set(key, _as_flag(raw))
            else:
                config.set(key, raw)
        return config


GLOBAL_CONFIGURATION = Configuration()
