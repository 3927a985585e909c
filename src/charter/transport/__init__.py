"""Serial transport adapter for the LoRa receiver."""

from .serial_port import DEFAULT_BAUDRATE, DEFAULT_TIMEOUT_S, SerialTransport, open_serial

__all__ = ["DEFAULT_BAUDRATE", "DEFAULT_TIMEOUT_S", "SerialTransport", "open_serial"]
