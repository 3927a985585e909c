"""Split a chunked serial byte stream into complete ``\\r\\n`` terminated lines."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from .errors import DecodeError

logger = logging.getLogger(__name__)

LINE_DELIMITER = "\r\n"


class LineFramer:
    """Carry-over buffer that turns raw chunks into trimmed lines.

    Bytes that arrive without a delimiter stay in the buffer until a later
    chunk completes the line, so a line split across any number of reads is
    yielded exactly once.
    """

    def __init__(self, delimiter: str = LINE_DELIMITER, *, log: Optional[logging.Logger] = None) -> None:
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        self._delimiter = delimiter
        self._buffer = ""
        self._log = log or logger

    @property
    def pending(self) -> str:
        """Text received so far that is not yet part of a complete line."""
        return self._buffer

    def append(self, chunk: bytes) -> None:
        """Add one chunk to the buffer.

        Raises :class:`DecodeError` if the chunk is not valid UTF-8; in that
        case nothing from the chunk is kept.
        """
        try:
            text = chunk.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Chunk of {len(chunk)} bytes is not valid UTF-8: {exc}") from exc
        self._buffer += text

    def drain_lines(self) -> Iterator[str]:
        """Yield every complete line currently buffered.

        Only the consumed segment (line plus delimiter) is removed each time,
        so several lines delivered in one chunk all come out.
        """
        while True:
            pos = self._buffer.find(self._delimiter)
            if pos < 0:
                return
            line = self._buffer[:pos].rstrip()
            self._buffer = self._buffer[pos + len(self._delimiter) :]
            self._log.debug("Framed line %r (%d chars pending)", line, len(self._buffer))
            yield line

    def feed(self, chunk: bytes) -> list[str]:
        """Append ``chunk`` and return the lines it completed."""
        self.append(chunk)
        return list(self.drain_lines())

    def clear(self) -> None:
        self._buffer = ""
