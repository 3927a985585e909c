"""Exception hierarchy shared by the framing, decoding, transport and sink layers.

Callers match on the concrete subclasses:

- :class:`FrameError` subclasses are per-frame and never abort the stream.
- :class:`TransportError` subclasses come from the serial link; only
  :class:`TransportTimeout` and :class:`TransportInterrupted` are expected.
- :class:`SinkResourceMissing` is the only fatal sink failure.
"""

from __future__ import annotations

__all__ = [
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
]


class CharterError(Exception):
    """Base class for every error raised by charter itself."""


class FrameError(CharterError):
    """A single frame could not be turned into a record."""


class IrregularMessage(FrameError):
    """The line does not have the ``<tag> <hex>`` shape of a data frame."""

    def __init__(self, line: str, reason: str = "this line doesn't contain any data") -> None:
        super().__init__(f"Irregular message: {reason}: {line!r}")
        self.line = line


class DecodeError(FrameError):
    """Hex or UTF-8 decoding failed."""


class ParseError(FrameError):
    """A numeric record field is not a valid integer."""


class TransportError(CharterError):
    """Unrecoverable serial transport failure."""


class TransportTimeout(TransportError):
    """The bounded read returned no data; an idle poll, not a failure."""


class TransportInterrupted(TransportError):
    """The blocking read was interrupted; treated as a request to exit."""


class SinkError(CharterError):
    """A sink could not consume a record."""


class SinkResourceMissing(SinkError):
    """The sink destination is absent and may not be created."""
