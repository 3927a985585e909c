"""
Main receive loop: read chunks, frame lines, decode payloads, dispatch records.

Error policy:

- :class:`TransportTimeout` is an idle poll and is ignored silently.
- :class:`TransportInterrupted` ends the loop with exit status 0.
- Any other :class:`TransportError` propagates (fatal).
- :class:`FrameError` (irregular line, bad hex/UTF-8, bad integer) is logged
  and only that frame is skipped.
- :class:`SinkResourceMissing` propagates (fatal); the dispatcher contains
  every other sink failure.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .decoding import decode_frame
from .errors import DecodeError, FrameError, TransportInterrupted, TransportTimeout
from .framing import LineFramer
from .lifecycle import ShutdownFlag
from .pipeline import Dispatcher

logger = logging.getLogger(__name__)

DEFAULT_READ_SIZE = 1024


class ByteSource(Protocol):
    """Read side of the transport."""

    def read(self, size: int) -> bytes:  # pragma: no cover - protocol
        ...


def process_line(line: str, dispatcher: Dispatcher, *, log: Optional[logging.Logger] = None) -> bool:
    """Decode one framed line and dispatch it. Returns True if a record was delivered."""
    log = log or logger
    try:
        payload = decode_frame(line, log=log)
        return dispatcher.dispatch(payload) is not None
    except FrameError as exc:
        log.warning("%s", exc)
        return False


def reader_loop(
    source: ByteSource,
    dispatcher: Dispatcher,
    flag: ShutdownFlag,
    *,
    framer: Optional[LineFramer] = None,
    read_size: int = DEFAULT_READ_SIZE,
    log: Optional[logging.Logger] = None,
) -> int:
    """Run until ``flag`` is set or the read is interrupted.

    Returns the process exit status for a clean stop (always 0); fatal
    errors propagate to the caller.
    """
    log = log or logger
    framer = framer or LineFramer(log=log)

    while not flag.is_set():
        try:
            chunk = source.read(read_size)
        except TransportTimeout:
            continue
        except TransportInterrupted:
            log.info("Read interrupted, exiting")
            return 0

        if not chunk:
            continue

        try:
            framer.append(chunk)
        except DecodeError as exc:
            log.error("%s", exc)
            continue

        for line in framer.drain_lines():
            process_line(line, dispatcher, log=log)

    log.debug("Shutdown requested, leaving reader loop")
    return 0


__all__ = ["ByteSource", "DEFAULT_READ_SIZE", "process_line", "reader_loop"]
