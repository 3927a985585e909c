"""Core receive pipeline: framing, decoding, records, lifecycle and dispatch.

This package sits between the serial transport and the sinks by turning a
chunked byte stream into fixed-arity records and handing each one to the
configured sink.
"""

# Stream -> record stages
from .framing import LINE_DELIMITER, LineFramer
from .decoding import decode_frame, decode_payload
from .records import FIELD_COUNT, NumericRecord, Record, parse_numeric_record, parse_record

# Errors, lifecycle and dispatch
from .errors import (
    CharterError,
    DecodeError,
    FrameError,
    IrregularMessage,
    ParseError,
    SinkError,
    SinkResourceMissing,
    TransportError,
    TransportInterrupted,
    TransportTimeout,
)
from .lifecycle import START_COMMAND, STOP_COMMAND, LifecycleController, ShutdownFlag, State
from .pipeline import CsvSink, Dispatcher, HistogramSink, LogSink, NullSink, RecordSink
from .reader import process_line, reader_loop

__all__ = [
    "LINE_DELIMITER",
    "LineFramer",
    "decode_frame",
    "decode_payload",
    "FIELD_COUNT",
    "Record",
    "NumericRecord",
    "parse_record",
    "parse_numeric_record",
    "CharterError",
    "FrameError",
    "IrregularMessage",
    "DecodeError",
    "ParseError",
    "TransportError",
    "TransportTimeout",
    "TransportInterrupted",
    "SinkError",
    "SinkResourceMissing",
    "START_COMMAND",
    "STOP_COMMAND",
    "LifecycleController",
    "ShutdownFlag",
    "State",
    "RecordSink",
    "LogSink",
    "CsvSink",
    "HistogramSink",
    "NullSink",
    "Dispatcher",
    "process_line",
    "reader_loop",
]
