from __future__ import annotations

from enum import Enum


class LogSeverity(str, Enum):
    """
    Escalation level of a log entry.

    Independent of the entry's category: a Warning may be Low or
    Critical depending on what it affects.
    """

    NONE = "None"           # Purely informational, nothing to escalate
    LOW = "Low"             # Normal operation worth recording
    MEDIUM = "Medium"       # Unexpected but recoverable
    HIGH = "High"           # Operation failed, application continued
    CRITICAL = "Critical"   # Application integrity at risk

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, value: LogSeverity | str) -> LogSeverity:
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(f"Unknown log severity: {value!r}")


_RANKS = {severity: index for index, severity in enumerate(LogSeverity)}
