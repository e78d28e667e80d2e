from __future__ import annotations

import sys
import uuid
from typing import Any, Optional, TextIO

from unclog.diagnostics import CONSOLE_EXTRA, logger
from unclog.log_entry import LogEntry
from unclog.log_type import FALLBACK_COLOR

DELIMITER = " | "
DATETIME_WIDTH = 27
SEVERITY_WIDTH = 8
TYPE_WIDTH = 11

COLOR_EXTRA = "unclog_color"


class ConsoleLogSink:
    """
    Log sink that renders one colorized line per entry.

    Lines go through a loguru handler owned by this sink and bound to
    its stream; color is chosen by the entry's type. Colors are emitted
    only when the stream is a terminal unless `colorize` says otherwise.
    """

    def __init__(self, stream: Optional[TextIO] = None, *, colorize: Optional[bool] = None):
        self._key = uuid.uuid4().hex
        self._stream = stream if stream is not None else sys.stdout
        self._handler_id: Optional[int] = logger.add(
            self._stream,
            level=0,
            format=self._format,
            filter=self._owns,
            colorize=colorize,
        )

    @staticmethod
    def render(entry: LogEntry) -> str:
        return DELIMITER.join(
            [
                entry.datetime.ljust(DATETIME_WIDTH),
                entry.severity.value.ljust(SEVERITY_WIDTH),
                entry.type.value.ljust(TYPE_WIDTH),
                entry.head,
            ]
        )

    def emit(self, entry: LogEntry) -> None:
        if self._handler_id is None:
            return
        logger.bind(**{CONSOLE_EXTRA: self._key, COLOR_EXTRA: entry.type.color}).log(
            "INFO", self.render(entry)
        )

    def close(self) -> None:
        if self._handler_id is not None:
            logger.remove(self._handler_id)
            self._handler_id = None

    def _owns(self, record: Any) -> bool:
        return record["extra"].get(CONSOLE_EXTRA) == self._key

    @staticmethod
    def _format(record: Any) -> str:
        color = record["extra"].get(COLOR_EXTRA, FALLBACK_COLOR)
        return f"<{color}>{{message}}</{color}>\n"
