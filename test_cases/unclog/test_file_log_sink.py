import json
from pathlib import Path

import pytest

from unclog.file_log_sink import FileLogSink, read_entries
from unclog.log_errors import DirectoryCreateError, SinkError, SinkWriteError


def test_append_creates_missing_directory(tmp_path, make_entry) -> None:
    directory = tmp_path / "tmp" / "logs"
    entry = make_entry(head="boot", type="Information")

    path = FileLogSink().append(directory, entry)

    assert path == directory / "2024-04-01.unclog"
    assert [p.name for p in directory.iterdir()] == ["2024-04-01.unclog"]
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [entry.to_json()]
    assert json.loads(lines[0])["Head"] == "boot"


def test_append_into_existing_directory(tmp_path, make_entry) -> None:
    path = FileLogSink().append(str(tmp_path), make_entry())
    assert path.parent == tmp_path
    assert path.exists()


def test_sequential_appends_keep_call_order(tmp_path, make_entry) -> None:
    sink = FileLogSink()
    heads = [f"step {i}" for i in range(5)]
    for head in heads:
        sink.append(tmp_path, make_entry(head=head))

    records = list(read_entries(tmp_path / "2024-04-01.unclog"))
    assert [r["Head"] for r in records] == heads


def test_appends_never_overwrite_existing_lines(tmp_path, make_entry) -> None:
    path = tmp_path / "2024-04-01.unclog"
    path.write_text('{"Head": "earlier"}\n', encoding="utf-8")

    FileLogSink().append(tmp_path, make_entry(head="later"))

    assert [r["Head"] for r in read_entries(path)] == ["earlier", "later"]


def test_each_calendar_day_gets_its_own_file(tmp_path, make_entry) -> None:
    sink = FileLogSink()
    first = sink.append(tmp_path, make_entry(datetime="2024-04-01T23:59:59.999999Z"))
    second = sink.append(tmp_path, make_entry(datetime="2024-04-02T00:00:00.000000Z"))

    assert first != second
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "2024-04-01.unclog",
        "2024-04-02.unclog",
    ]


def test_nested_body_round_trips(tmp_path, make_entry) -> None:
    body = {"request": {"id": 7, "tags": ["a", "b"], "meta": {"retry": None}}}
    path = FileLogSink().append(tmp_path, make_entry(body=body))

    [record] = read_entries(path)
    assert record["Body"] == body


def test_multiline_body_stays_on_one_line(tmp_path, make_entry) -> None:
    path = FileLogSink().append(tmp_path, make_entry(body="Traceback:\n  line 1\n  line 2"))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1


def test_read_entries_skips_blank_lines(tmp_path) -> None:
    path = tmp_path / "2024-04-01.unclog"
    path.write_text('{"Head": "a"}\n\n{"Head": "b"}\n\n', encoding="utf-8")
    assert [r["Head"] for r in read_entries(path)] == ["a", "b"]


def test_custom_extension(tmp_path, make_entry) -> None:
    path = FileLogSink(extension=".jsonl").append(tmp_path, make_entry())
    assert path.name == "2024-04-01.jsonl"


def test_other_failures_are_not_retried(tmp_path, make_entry, monkeypatch) -> None:
    calls = []

    def refuse(path, line):
        calls.append(path)
        raise PermissionError("denied")

    monkeypatch.setattr(FileLogSink, "_write_line", staticmethod(refuse))
    entry = make_entry()

    with pytest.raises(SinkWriteError) as excinfo:
        FileLogSink().append(tmp_path, entry)

    assert len(calls) == 1
    assert excinfo.value.identifier == entry.identifier
    assert isinstance(excinfo.value.__cause__, PermissionError)


def test_directory_under_a_file_fails_without_retry(tmp_path, make_entry) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(SinkError):
        FileLogSink().append(blocker / "logs", make_entry())


def test_directory_create_failure(tmp_path, make_entry, monkeypatch) -> None:
    def no_mkdir(self, *args, **kwargs):
        raise PermissionError("read-only file system")

    monkeypatch.setattr(Path, "mkdir", no_mkdir)

    with pytest.raises(DirectoryCreateError) as excinfo:
        FileLogSink().append(tmp_path / "missing", make_entry())

    assert excinfo.value.path == tmp_path / "missing" / "2024-04-01.unclog"


def test_retry_happens_exactly_once(tmp_path, make_entry, monkeypatch) -> None:
    calls = []

    def always_missing(path, line):
        calls.append(path)
        raise FileNotFoundError(path)

    monkeypatch.setattr(FileLogSink, "_write_line", staticmethod(always_missing))

    with pytest.raises(SinkWriteError):
        FileLogSink().append(tmp_path / "missing", make_entry())

    assert len(calls) == 2
    assert (tmp_path / "missing").is_dir()


def test_invalid_path_surfaces_as_sink_error(tmp_path, make_entry) -> None:
    with pytest.raises(SinkWriteError):
        FileLogSink().append(str(tmp_path) + "/bad\x00dir", make_entry())


@pytest.mark.parametrize(
    "body",
    [{("a", "b"): 1}, {"ratio": float("inf")}],
    ids=["tuple-keys", "infinity"],
)
def test_unserializable_body_is_a_sink_error(tmp_path, make_entry, body) -> None:
    with pytest.raises(SinkWriteError, match="serialize"):
        FileLogSink().append(tmp_path, make_entry(body=body))
    assert list(tmp_path.iterdir()) == []


def test_written_lines_are_strict_json(tmp_path, make_entry) -> None:
    def reject(constant):
        raise ValueError(constant)

    path = FileLogSink().append(tmp_path, make_entry(body={"ratio": 0.5, "n": [1, 2]}))
    for line in path.read_text(encoding="utf-8").splitlines():
        assert json.loads(line, parse_constant=reject)["Body"]["ratio"] == 0.5


def test_day_file_stays_inside_directory(tmp_path, make_entry) -> None:
    directory = tmp_path / "d"
    path = FileLogSink().append(directory, make_entry(datetime="2024-12-31T23:59:59Z"))
    assert path.parent == directory
    assert list(tmp_path.iterdir()) == [directory]
