from __future__ import annotations

import datetime as dt
import json
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from unclog.execution_context import (
    StackFrame,
    current_machine,
    current_user,
    utc_timestamp,
)
from unclog.log_errors import InvalidLogEntryError
from unclog.log_severity import LogSeverity
from unclog.log_type import LogType

# UTC only: the day file is named from the first 10 characters
TIMESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z")


@dataclass(frozen=True)
class LogEntry:
    """
    Atomic record of a single logged event.

    Built once by the emitter, stamped with when, where and by whom it
    was produced, and never mutated or reused afterwards. Each entry is
    persisted as exactly one JSON line.
    """

    head: str
    # Short human-readable title. Required and non-empty.

    type: LogType = LogType.INFORMATION
    # Category of the event. "Info" is accepted as Information.

    severity: Optional[LogSeverity] = None
    # Escalation level. Defaults to the category's default severity.

    body: Any = None
    # Structured detail payload. Must be JSON-serializable to round-trip;
    # anything else is persisted through str().

    application: str = "unclog"
    # Name of the emitting application.

    identifier: str = field(default_factory=lambda: str(uuid.uuid4()))
    # Unique per entry. Used for correlation and diagnostics.

    datetime: str = field(default_factory=utc_timestamp)
    # UTC construction time, fixed for the life of the entry.

    machine: str = field(default_factory=current_machine)
    user: str = field(default_factory=current_user)

    call_stack: tuple[StackFrame, ...] = ()
    # Outermost caller first, emitting frame last.

    def __post_init__(self) -> None:
        if not isinstance(self.head, str) or not self.head.strip():
            raise InvalidLogEntryError("head must be a non-empty string.")
        _check_timestamp(self.datetime)
        try:
            entry_type = LogType.parse(self.type)
            severity = (
                entry_type.default_severity
                if self.severity is None
                else LogSeverity.parse(self.severity)
            )
        except ValueError as e:
            raise InvalidLogEntryError(str(e)) from e

        # Frozen: normalized values go in through object.__setattr__
        object.__setattr__(self, "type", entry_type)
        object.__setattr__(self, "severity", severity)
        object.__setattr__(self, "call_stack", tuple(self.call_stack))

    @property
    def day(self) -> str:
        """Calendar day (YYYY-MM-DD) the entry belongs to."""
        return self.datetime[:10]

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "Identifier": self.identifier,
            "Application": self.application,
            "Type": self.type.value,
            "Severity": self.severity.value,
            "Head": self.head,
        }
        if self.body is not None:
            record["Body"] = self.body
        record.update(
            {
                "Datetime": self.datetime,
                "Machine": self.machine,
                "User": self.user,
                "CallStack": [frame.to_dict() for frame in self.call_stack],
            }
        )
        return record

    def to_json(self) -> str:
        """
        Single-line JSON form. Newlines inside values are escaped.

        Raises TypeError or ValueError for bodies JSON cannot express
        (non-string keys, circular references, NaN or infinity).
        """
        return json.dumps(self.to_dict(), ensure_ascii=False, allow_nan=False, default=str)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogEntry:
        """
        Rebuild an entry from its persisted form.
        """
        if not isinstance(data, dict):
            raise InvalidLogEntryError("Log record must be a JSON object.")
        required = [
            "Identifier",
            "Application",
            "Type",
            "Severity",
            "Head",
            "Datetime",
            "Machine",
            "User",
        ]
        missing = [k for k in required if k not in data]
        if missing:
            raise InvalidLogEntryError(f"Missing required fields: {missing}")

        try:
            frames = tuple(
                StackFrame.from_dict(frame) for frame in data.get("CallStack") or []
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidLogEntryError(f"Invalid call stack: {e}") from e

        return cls(
            head=data["Head"],
            type=data["Type"],
            severity=data["Severity"],
            body=data.get("Body"),
            application=str(data["Application"]),
            identifier=str(data["Identifier"]),
            datetime=str(data["Datetime"]),
            machine=str(data["Machine"]),
            user=str(data["User"]),
            call_stack=frames,
        )

    @classmethod
    def from_json(cls, line: str) -> LogEntry:
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise InvalidLogEntryError(f"Invalid log line (not JSON): {e}") from e
        return cls.from_dict(data)


def _check_timestamp(value: Any) -> None:
    if not isinstance(value, str) or not TIMESTAMP_PATTERN.fullmatch(value):
        raise InvalidLogEntryError(
            f"datetime must be ISO-8601 UTC ending in Z, got {value!r}."
        )
    try:
        dt.date.fromisoformat(value[:10])
        dt.time.fromisoformat(value[11:19])
    except ValueError as e:
        raise InvalidLogEntryError(f"Invalid datetime {value!r}: {e}") from e
