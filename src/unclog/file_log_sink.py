from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Iterator, Union

from unclog.log_entry import LogEntry
from unclog.log_errors import DirectoryCreateError, SinkWriteError

PathLike = Union[str, Path]

LOG_FILE_EXTENSION = ".unclog"


class FileLogSink:
    """
    Log sink that persists entries to append-only JSONL files.

    One file per calendar day per directory, named YYYY-MM-DD.unclog.
    Each entry is written as a single JSON object per line, enabling
    tailing, replay and offline analysis.

    The directory is not checked before writing. It is created only
    after an append fails because it is missing, and the append is then
    retried exactly once.
    """

    def __init__(self, extension: str = LOG_FILE_EXTENSION):
        self._extension = extension
        self._lock = threading.Lock()

    def path_for(self, directory: PathLike, entry: LogEntry) -> Path:
        return Path(directory) / f"{entry.day}{self._extension}"

    def append(self, directory: PathLike, entry: LogEntry) -> Path:
        """
        Append one entry as one line to its day file under `directory`.

        Returns the path written. Raises DirectoryCreateError when the
        missing directory cannot be created and SinkWriteError for any
        other failure, including a body JSON cannot express. The file
        handle is flushed and closed before returning on every path.
        """
        path = self.path_for(directory, entry)
        try:
            line = entry.to_json() + "\n"
        except (TypeError, ValueError) as e:
            raise SinkWriteError(
                entry.identifier, f"Could not serialize log entry: {e}", path
            ) from e

        with self._lock:
            try:
                self._write_line(path, line)
                return path
            except FileNotFoundError:
                pass
            except (OSError, ValueError) as e:
                raise SinkWriteError(
                    entry.identifier, f"Could not write log file {path}: {e}", path
                ) from e

            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryCreateError(
                    entry.identifier,
                    f"Could not create log directory {path.parent}: {e}",
                    path,
                ) from e

            try:
                self._write_line(path, line)
            except (OSError, ValueError) as e:
                raise SinkWriteError(
                    entry.identifier,
                    f"Could not write log file {path} after creating its directory: {e}",
                    path,
                ) from e
        return path

    @staticmethod
    def _write_line(path: Path, line: str) -> None:
        with path.open("a", encoding="utf-8") as f:
            f.write(line)
            f.flush()


def read_entries(path: PathLike) -> Iterator[dict[str, Any]]:
    """
    Yield the JSON objects stored in a log file, in append order.

    Blank lines (for example a trailing newline) are skipped.
    """
    with Path(path).open("r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                yield json.loads(line)
