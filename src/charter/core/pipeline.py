"""Record sinks and the dispatch step that feeds them."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from ..dataio.csv_writer import append_row
from ..dataio.file_paths import histogram_path
from ..tools.debug import time_block
from ..tools.histogram import render_histogram
from .errors import SinkError, SinkResourceMissing
from .records import NumericRecord, Record, parse_numeric_record, parse_record

__all__ = [
    "RecordSink",
    "LogSink",
    "CsvSink",
    "HistogramSink",
    "NullSink",
    "Dispatcher",
]

logger = logging.getLogger(__name__)


class RecordSink(Protocol):
    """Common interface implemented by every sink.

    ``parse`` turns a decoded payload into the record type the sink consumes;
    ``handle_record`` consumes it. Raising :class:`SinkResourceMissing` from
    ``handle_record`` stops the process; any other exception only drops the
    record.
    """

    def parse(self, text: str) -> Record | NumericRecord:  # pragma: no cover - protocol
        ...

    def handle_record(self, record: Record | NumericRecord, index: int) -> None:  # pragma: no cover - protocol
        ...


@dataclass(slots=True)
class LogSink(RecordSink):
    """Reports each record through logging when no output is configured."""

    log: logging.Logger = field(default_factory=lambda: logger)

    def parse(self, text: str) -> Record:
        return parse_record(text)

    def handle_record(self, record: Record, index: int) -> None:
        self.log.info("%d: %s", index, list(record))


@dataclass(slots=True)
class CsvSink(RecordSink):
    """Appends one CSV row per record."""

    path: Path
    create: bool = False
    log: logging.Logger = field(default_factory=lambda: logger)

    def parse(self, text: str) -> Record:
        return parse_record(text)

    def handle_record(self, record: Record, index: int) -> None:
        try:
            append_row(self.path, list(record), create=self.create)
        except FileNotFoundError as exc:
            raise SinkResourceMissing(str(exc)) from exc
        except OSError as exc:
            raise SinkError(f"Failed to write {self.path}: {exc}") from exc
        self.log.debug("Written %s to %s (%d)", list(record), self.path, index)


@dataclass(slots=True)
class HistogramSink(RecordSink):
    """Renders one PNG histogram per numeric record."""

    directory: Path
    create: bool = False
    prefix: str = "histogram"
    renderer: Callable[..., Path] = render_histogram
    log: logging.Logger = field(default_factory=lambda: logger)

    def parse(self, text: str) -> NumericRecord:
        return parse_numeric_record(text)

    def handle_record(self, record: NumericRecord, index: int) -> None:
        if not self.directory.is_dir():
            if not self.create:
                raise SinkResourceMissing(
                    f"Histogram directory {self.directory} does not exist (pass --create to create it)"
                )
            self.directory.mkdir(parents=True, exist_ok=True)
        target = histogram_path(self.directory, index, self.prefix)
        with time_block(f"render {target.name}", log=self.log):
            self.renderer(record.values, target, title=f"Record {index}")
        self.log.debug("Rendered %s to %s (%d)", record.tolist(), target, index)


@dataclass(slots=True)
class NullSink(RecordSink):
    """No-op sink used when output is disabled."""

    def parse(self, text: str) -> Record:
        return parse_record(text)

    def handle_record(self, record: Record, index: int) -> None:  # pragma: no cover - trivial
        return


@dataclass(slots=True)
class Dispatcher:
    """Hand each decoded payload to exactly one sink.

    ``index`` counts successfully dispatched records and names histogram
    artifacts, so it only advances when the sink accepted the record.
    """

    sink: RecordSink = field(default_factory=NullSink)
    log: logging.Logger = field(default_factory=lambda: logger)
    index: int = 0

    def dispatch(self, text: str) -> Optional[Record | NumericRecord]:
        """Parse ``text`` and pass it to the sink.

        Returns the record on success and ``None`` when it was dropped.
        :class:`SinkResourceMissing` propagates; :class:`~.errors.ParseError`
        propagates so the caller can report it like any frame error.
        """
        record = self.sink.parse(text)
        try:
            self.sink.handle_record(record, self.index)
        except SinkResourceMissing:
            raise
        except Exception:
            self.log.exception("Failed to dispatch record %d", self.index)
            return None
        self.index += 1
        return record
