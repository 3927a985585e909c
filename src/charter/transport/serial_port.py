"""
pyserial adapter for the LoRa receiver.

Default link settings: 115200 baud, 8N1, 1 s read timeout. ``read`` waits
for the first byte up to the timeout and then takes whatever else is already
waiting, so a line is delivered as soon as it arrives instead of after the
buffer fills.
"""

from __future__ import annotations

import logging
from typing import Optional

import serial

from ..core.errors import TransportError, TransportInterrupted, TransportTimeout

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 115200
DEFAULT_TIMEOUT_S = 1.0


def open_serial(port: str, baudrate: int = DEFAULT_BAUDRATE, timeout_s: float = DEFAULT_TIMEOUT_S) -> serial.Serial:
    """Open ``port`` with the receiver's line settings."""
    try:
        return serial.Serial(
            port=port,
            baudrate=baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=timeout_s,
        )
    except (serial.SerialException, ValueError) as exc:
        raise TransportError(f"Failed to open {port}: {exc}") from exc


class SerialTransport:
    """Duplex byte channel over a :class:`serial.Serial` handle.

    :meth:`try_clone` returns a second adapter over the same handle for the
    shutdown path; only the original owns the port and closes it.
    """

    def __init__(self, ser: serial.Serial, *, owner: bool = True, log: Optional[logging.Logger] = None) -> None:
        self._serial = ser
        self._owner = owner
        self._log = log or logger

    @classmethod
    def open(cls, port: str, baudrate: int = DEFAULT_BAUDRATE, timeout_s: float = DEFAULT_TIMEOUT_S) -> SerialTransport:
        return cls(open_serial(port, baudrate, timeout_s))

    @property
    def port(self) -> Optional[str]:
        return self._serial.port

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes.

        Raises :class:`TransportTimeout` when nothing arrived within the
        timeout, :class:`TransportInterrupted` on ``EINTR`` and
        :class:`TransportError` for anything else.
        """
        try:
            data = self._serial.read(1)
            if data:
                waiting = self._serial.in_waiting
                if waiting:
                    data += self._serial.read(min(size - 1, waiting))
        except InterruptedError as exc:
            raise TransportInterrupted(str(exc)) from exc
        except (serial.SerialException, OSError) as exc:
            raise TransportError(f"Serial read failed: {exc}") from exc
        if not data:
            raise TransportTimeout()
        return data

    def write_all(self, data: bytes) -> None:
        try:
            self._serial.write(data)
            self._serial.flush()
        except (serial.SerialException, OSError) as exc:
            raise TransportError(f"Serial write failed: {exc}") from exc
        self._log.debug("Sent %r", data)

    def try_clone(self) -> SerialTransport:
        return SerialTransport(self._serial, owner=False, log=self._log)

    def close(self) -> None:
        if self._owner and self._serial.is_open:
            self._serial.close()

    def __enter__(self) -> SerialTransport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["DEFAULT_BAUDRATE", "DEFAULT_TIMEOUT_S", "SerialTransport", "open_serial"]
