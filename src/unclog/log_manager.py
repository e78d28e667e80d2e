from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Protocol, Union

from unclog.configuration import Configuration
from unclog.console_log_sink import ConsoleLogSink
from unclog.diagnostics import logger
from unclog.execution_context import StackFrame, capture_call_stack
from unclog.file_log_sink import FileLogSink
from unclog.log_entry import LogEntry
from unclog.log_errors import SinkError
from unclog.log_severity import LogSeverity
from unclog.log_type import LogType


class LogSink(Protocol):
    """
    Destination for log entries.

    A LogSink may display entries, stream them to subscribers, or
    forward them to another subsystem.
    """

    def emit(self, entry: LogEntry) -> None:
        """
        Receive a log entry for processing.

        Must not block the caller.
        """


class LogManager:
    """
    Central coordinator for logging.

    Builds a LogEntry per request and dispatches it to the file sink
    and the console sink as the configuration allows, then to any
    registered sinks. Emission never fails the caller because a sink
    failed; the only error it raises is InvalidLogEntryError for a
    request that cannot form an entry (empty head, unknown type).
    """

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        *,
        file_sink: Optional[FileLogSink] = None,
        console_sink: Optional[LogSink] = None,
    ):
        self.configuration = configuration if configuration is not None else Configuration()
        self._file_sink = file_sink if file_sink is not None else FileLogSink()
        self._console_sink = console_sink if console_sink is not None else ConsoleLogSink()
        self._sinks: list[LogSink] = []

    def register_sink(self, sink: LogSink) -> None:
        """
        Register an additional sink to receive every emitted entry.
        """
        self._sinks.append(sink)

    def close(self) -> None:
        """Release sinks that hold resources (the console handler)."""
        for sink in [self._console_sink, *self._sinks]:
            close = getattr(sink, "close", None)
            if close is not None:
                close()

    def emit(
        self,
        head: str,
        body: Any = None,
        severity: Union[LogSeverity, str, None] = None,
        type: Union[LogType, str] = LogType.INFORMATION,
        application: Optional[str] = None,
        directory: Union[str, Path, None] = None,
        identifier: Optional[str] = None,
        call_stack: Optional[Iterable[StackFrame]] = None,
    ) -> None:
        config = self.configuration
        fields: dict[str, Any] = {}
        if identifier:
            fields["identifier"] = identifier

        entry = LogEntry(
            head=head,
            type=type,
            severity=severity,
            body=body,
            application=application or config.application_name,
            call_stack=(
                tuple(call_stack) if call_stack is not None else capture_call_stack()
            ),
            **fields,
        )

        if config.write_logs:
            self._write(directory or config.log_directory, entry)

        if config.show_logs:
            self._dispatch(self._console_sink, entry)

        for sink in self._sinks:
            self._dispatch(sink, entry)

    def success(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.SUCCESS, **kwargs)

    def info(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.INFORMATION, **kwargs)

    def warning(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.WARNING, **kwargs)

    def error(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.ERROR, **kwargs)

    def debug(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.DEBUG, **kwargs)

    def _write(self, directory: Union[str, Path], entry: LogEntry) -> None:
        try:
            self._file_sink.append(directory, entry)
        except SinkError as e:
            logger.warning(
                "Could not write log entry {} ({}) to {}: {}",
                entry.identifier,
                entry.datetime,
                directory,
                e.reason,
            )

    @staticmethod
    def _dispatch(sink: LogSink, entry: LogEntry) -> None:
        try:
            sink.emit(entry)
        except Exception:
            # Logging must never destabilize the host application.
            logger.opt(exception=True).warning(
                "Log sink {} failed on entry {} ({})",
                type(sink).__name__,
                entry.identifier,
                entry.datetime,
            )


class Logger:
    """
    Convenience façade bound to a specific application name.
    """

    def __init__(self, application: str, manager: LogManager):
        self._application = application
        self._manager = manager

    def emit(self, head: str, body: Any = None, **kwargs: Any) -> None:
        kwargs.setdefault("application", self._application)
        self._manager.emit(head, body, **kwargs)

    def success(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.SUCCESS, **kwargs)

    def info(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.INFORMATION, **kwargs)

    def warning(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.WARNING, **kwargs)

    def error(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.ERROR, **kwargs)

    def debug(self, head: str, body: Any = None, **kwargs: Any) -> None:
        self.emit(head, body, type=LogType.DEBUG, **kwargs)
