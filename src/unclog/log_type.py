from __future__ import annotations

from enum import Enum

from unclog.log_severity import LogSeverity


class LogType(str, Enum):
    """Category of the event a log entry describes."""

    SUCCESS = "Success"
    INFORMATION = "Information"
    WARNING = "Warning"
    ERROR = "Error"
    DEBUG = "Debug"

    @property
    def default_severity(self) -> LogSeverity:
        return DEFAULT_SEVERITIES[self]

    @property
    def color(self) -> str:
        return CONSOLE_COLORS.get(self, FALLBACK_COLOR)

    @classmethod
    def parse(cls, value: LogType | str) -> LogType:
        """
        Resolve a category from its enum member or name.

        "Info" is accepted as a synonym of "Information" so callers
        never split the taxonomy into two categories.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in TYPE_ALIASES:
            return TYPE_ALIASES[text]
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(f"Unknown log type: {value!r}")


TYPE_ALIASES = {
    "info": LogType.INFORMATION,
}

DEFAULT_SEVERITIES = {
    LogType.DEBUG: LogSeverity.NONE,
    LogType.INFORMATION: LogSeverity.LOW,
    LogType.SUCCESS: LogSeverity.LOW,
    LogType.WARNING: LogSeverity.MEDIUM,
    LogType.ERROR: LogSeverity.HIGH,
}

# loguru color markup names
CONSOLE_COLORS = {
    LogType.SUCCESS: "green",
    LogType.INFORMATION: "cyan",
    LogType.WARNING: "yellow",
    LogType.ERROR: "red",
    LogType.DEBUG: "magenta",
}

FALLBACK_COLOR = "magenta"


def color_for(value: LogType | str) -> str:
    """Console color for a category; unrecognized names get the fallback."""
    try:
        return LogType.parse(value).color
    except ValueError:
        return FALLBACK_COLOR
