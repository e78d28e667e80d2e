from __future__ import annotations

import datetime as dt
import getpass
import os
import socket
import sys
from dataclasses import dataclass
from types import FrameType
from typing import Optional


@dataclass(frozen=True)
class StackFrame:
    """
    One active frame of the call chain that produced a log entry.
    """

    component: str
    # Dotted module.function name of the frame.

    file: str
    # Source file the frame is executing.

    line: int
    # Line currently executing in that file.

    def to_dict(self) -> dict[str, object]:
        return {"Component": self.component, "File": self.file, "Line": self.line}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> StackFrame:
        return cls(
            component=str(data["Component"]),
            file=str(data["File"]),
            line=int(data["Line"]),  # type: ignore[arg-type]
        )


INTERNAL_PACKAGE = "unclog"


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == INTERNAL_PACKAGE or module.startswith(INTERNAL_PACKAGE + ".")


def capture_call_stack(start: Optional[FrameType] = None) -> tuple[StackFrame, ...]:
    """
    Snapshot the active call chain, outermost caller first.

    Frames that belong to this package are skipped so the innermost
    frame is the one that asked for the entry to be emitted.
    """
    frame = start if start is not None else sys._getframe(1)
    frames: list[StackFrame] = []
    while frame is not None:
        if not _is_internal(frame):
            module = frame.f_globals.get("__name__", "<unknown>")
            frames.append(
                StackFrame(
                    component=f"{module}.{frame.f_code.co_name}",
                    file=frame.f_code.co_filename,
                    line=frame.f_lineno,
                )
            )
        frame = frame.f_back
    frames.reverse()
    return tuple(frames)


def utc_timestamp(now: Optional[dt.datetime] = None) -> str:
    """ISO-8601 UTC timestamp with microseconds and a Z designator."""
    moment = now if now is not None else dt.datetime.now(dt.timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(dt.timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def current_machine() -> str:
    return socket.gethostname() or "localhost"


def current_user() -> str:
    """Domain-qualified user name, e.g. WORKGROUP\\alice."""
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "unknown"
    domain = os.environ.get("USERDOMAIN") or current_machine()
    return f"{domain}\\{user}"
