import argparse
import json
import sys
from pathlib import Path

from unclog.configuration import Configuration
from unclog.console_log_sink import ConsoleLogSink
from unclog.log_entry import LogEntry
from unclog.log_errors import InvalidLogEntryError
from unclog.log_manager import LogManager
from unclog.log_severity import LogSeverity
from unclog.log_type import LogType
from unclog.file_log_sink import read_entries


def _parse_body(raw):
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def cmd_emit(args) -> int:
    config = Configuration.from_environ()
    if args.quiet:
        config.set("ShowLogs", False)

    manager = LogManager(config)
    try:
        manager.emit(
            args.head,
            _parse_body(args.body),
            severity=args.severity,
            type=args.type,
            application=args.application,
            directory=args.directory,
        )
    except InvalidLogEntryError as e:
        print(f"unclog: {e}", file=sys.stderr)
        return 2
    finally:
        manager.close()
    return 0


def cmd_show(args) -> int:
    path = Path(args.path)
    if not path.is_file():
        print(f"unclog: no such log file: {path}", file=sys.stderr)
        return 1

    sink = ConsoleLogSink()
    try:
        for record in read_entries(path):
            sink.emit(LogEntry.from_dict(record))
    except (json.JSONDecodeError, InvalidLogEntryError) as e:
        print(f"unclog: malformed log file {path}: {e}", file=sys.stderr)
        return 1
    finally:
        sink.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="unclog", description="Structured JSON-lines logging")
    sub = parser.add_subparsers(dest="command", required=True)

    emit = sub.add_parser("emit", help="Emit one log entry")
    emit.add_argument("head", help="Short title of the entry")
    emit.add_argument(
        "--type",
        default=LogType.INFORMATION.value,
        help="Success, Information (or Info), Warning, Error, Debug",
    )
    emit.add_argument(
        "--severity",
        default=None,
        choices=[s.value for s in LogSeverity],
        help="Defaults to the type's severity",
    )
    emit.add_argument("--body", default=None, help="JSON payload (raw text if not JSON)")
    emit.add_argument("--application", default=None)
    emit.add_argument("--directory", default=None, help="Log directory")
    emit.add_argument("--quiet", action="store_true", help="Do not print to the console")
    emit.set_defaults(func=cmd_emit)

    show = sub.add_parser("show", help="Print the entries of a log file")
    show.add_argument("path", help="Path to a .unclog file")
    show.set_defaults(func=cmd_show)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
