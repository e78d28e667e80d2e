import io

import pytest

from unclog.configuration import Configuration
from unclog.console_log_sink import ConsoleLogSink
from unclog.diagnostics import CONSOLE_EXTRA, logger
from unclog.log_entry import LogEntry
from unclog.log_manager import LogManager


@pytest.fixture
def diagnostics():
    """Warnings written to the diagnostic channel during the test."""
    messages = []
    handler_id = logger.add(
        messages.append,
        level="WARNING",
        format="{message}",
        filter=lambda record: CONSOLE_EXTRA not in record["extra"],
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def console():
    stream = io.StringIO()
    sink = ConsoleLogSink(stream, colorize=False)
    yield sink, stream
    sink.close()


@pytest.fixture
def make_manager(tmp_path, console):
    sink, stream = console

    def _make(**overrides) -> LogManager:
        config = Configuration()
        config.set("LogPath", str(tmp_path / "logs"))
        for key, value in overrides.items():
            config.set(key, value)
        return LogManager(config, console_sink=sink)

    return _make


@pytest.fixture
def make_entry():
    def _make(**fields) -> LogEntry:
        fields.setdefault("head", "boot")
        fields.setdefault("datetime", "2024-04-01T12:00:00.0000000Z")
        return LogEntry(**fields)

    return _make
