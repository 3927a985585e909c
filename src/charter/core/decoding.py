"""
Decode one framed radio line into its text payload.

The receiver reports each packet as two whitespace separated tokens::

    radio_rx  48656C6C6F

The second token is the packet body as hex; its bytes must form a UTF-8
string. Anything else (``ok``, ``radio_err``, firmware banners) is an
irregular message and is skipped by the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

from .errors import DecodeError, IrregularMessage

logger = logging.getLogger(__name__)

FRAME_TOKEN_COUNT = 2


def decode_payload(token: str) -> str:
    """Hex-decode ``token`` and interpret the bytes as UTF-8."""
    try:
        raw = bytes.fromhex(token)
    except ValueError as exc:
        raise DecodeError(f"Invalid hex payload {token!r}: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Payload {token!r} is not valid UTF-8: {exc}") from exc


def decode_frame(line: str, *, log: Optional[logging.Logger] = None) -> str:
    """Validate a raw line and return its decoded payload text."""
    tokens = line.split()
    if len(tokens) != FRAME_TOKEN_COUNT:
        (log or logger).debug("%s", line)
        raise IrregularMessage(line)
    return decode_payload(tokens[1])


__all__ = ["FRAME_TOKEN_COUNT", "decode_frame", "decode_payload"]
