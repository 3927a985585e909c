from __future__ import annotations

import csv
import logging
from pathlib import Path

import pytest

from charter.core.errors import ParseError, SinkResourceMissing
from charter.core.pipeline import CsvSink, Dispatcher, HistogramSink, LogSink
from charter.core.records import Record


def _read_rows(path: Path) -> list[list[str]]:
    with path.open(newline="", encoding="utf-8") as fh:
        return list(csv.reader(fh))


def test_csv_sink_appends_one_row_per_record(tmp_path: Path) -> None:
    path = tmp_path / "packets.csv"
    dispatcher = Dispatcher(CsvSink(path, create=True))

    dispatcher.dispatch("1 2 3")
    dispatcher.dispatch("a b c d e f g h i j k l")

    assert _read_rows(path) == [
        ["1", "2", "3", "", "", "", "", "", "", "", ""],
        ["a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k"],
    ]
    assert dispatcher.index == 2


def test_csv_sink_appends_to_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "packets.csv"
    path.write_text("x,y\r\n", encoding="utf-8")
    Dispatcher(CsvSink(path)).dispatch("Hello")
    assert _read_rows(path)[0] == ["x", "y"]
    assert _read_rows(path)[1][0] == "Hello"


def test_missing_csv_without_create_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "missing.csv"
    dispatcher = Dispatcher(CsvSink(path, create=False))
    with pytest.raises(SinkResourceMissing):
        dispatcher.dispatch("Hello")
    assert not path.exists()
    assert dispatcher.index == 0


def test_other_sink_failure_drops_record(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    # A directory in place of the CSV file: an OSError that is not "missing".
    path = tmp_path / "packets.csv"
    path.mkdir()
    dispatcher = Dispatcher(CsvSink(path, create=True))

    assert dispatcher.dispatch("Hello") is None
    assert dispatcher.index == 0
    assert "Failed to dispatch record 0" in caplog.text


def test_log_sink_reports_index_and_fields(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    dispatcher = Dispatcher(LogSink())
    record = dispatcher.dispatch("Hello")
    assert isinstance(record, Record)
    assert "0: ['Hello', ''," in caplog.text


def test_histogram_sink_names_artifacts_by_index(tmp_path: Path) -> None:
    calls: list[tuple[list[int], Path]] = []

    def fake_render(values, path, *, title=None):
        calls.append((list(values), path))
        return path

    sink = HistogramSink(tmp_path / "plots", create=True, renderer=fake_render)
    dispatcher = Dispatcher(sink)
    dispatcher.dispatch("1 2 3")
    dispatcher.dispatch("4 5 6")

    assert [path.name for _, path in calls] == ["histogram_000000.png", "histogram_000001.png"]
    assert calls[0][0] == [1, 2, 3, 0, 0, 0, 0, 0, 0, 0, 0]
    assert (tmp_path / "plots").is_dir()


def test_histogram_sink_missing_directory_is_fatal(tmp_path: Path) -> None:
    sink = HistogramSink(tmp_path / "plots", create=False, renderer=lambda *a, **k: None)
    with pytest.raises(SinkResourceMissing):
        Dispatcher(sink).dispatch("1 2 3")


def test_histogram_sink_propagates_parse_error(tmp_path: Path) -> None:
    sink = HistogramSink(tmp_path, renderer=lambda *a, **k: None)
    dispatcher = Dispatcher(sink)
    with pytest.raises(ParseError):
        dispatcher.dispatch("1 two 3")
    assert dispatcher.index == 0


def test_histogram_render_time_follows_log_level(tmp_path: Path, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHARTER_DEBUG", raising=False)
    caplog.set_level(logging.DEBUG)
    sink = HistogramSink(tmp_path, renderer=lambda *a, **k: None)

    Dispatcher(sink).dispatch("1 2 3")

    assert "render histogram_000000.png took" in caplog.text


def test_histogram_render_time_silent_without_debug(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    sink = HistogramSink(tmp_path, renderer=lambda *a, **k: None)
    Dispatcher(sink).dispatch("1 2 3")
    assert "took" not in caplog.text
