from __future__ import annotations

from typing import Callable, Iterable, Optional, Union

import matplotlib
import pytest

matplotlib.use("Agg")

from charter.core.errors import TransportInterrupted, TransportTimeout  # noqa: E402

Step = Union[bytes, BaseException]


class FakeTransport:
    """Scripted stand-in for :class:`charter.transport.SerialTransport`.

    Each ``read`` pops the next step: bytes are returned, exceptions raised.
    Once the script runs out the read is interrupted. ``on_read`` runs
    before every read, e.g. to simulate a signal arriving mid-read.
    """

    def __init__(self, steps: Iterable[Step] = (), *, on_read: Optional[Callable[[int], None]] = None) -> None:
        self.steps = list(steps)
        self.written: list[bytes] = []
        self.reads = 0
        self.clones = 0
        self.closed = False
        self.fail_writes = False
        self.on_read = on_read

    def read(self, size: int) -> bytes:
        self.reads += 1
        if self.on_read is not None:
            self.on_read(self.reads)
        if not self.steps:
            raise TransportInterrupted("script exhausted")
        step = self.steps.pop(0)
        if isinstance(step, BaseException):
            raise step
        return step[:size]

    def write_all(self, data: bytes) -> None:
        if self.fail_writes:
            raise OSError("write failed")
        self.written.append(data)

    def try_clone(self) -> FakeTransport:
        self.clones += 1
        return self

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeTransport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def frame(payload: str, tag: str = "radio_rx") -> bytes:
    """Encode ``payload`` the way the receiver reports a packet."""
    return f"{tag}  {payload.encode('utf-8').hex().upper()}\r\n".encode("ascii")


@pytest.fixture
def fake_transport() -> Callable[..., FakeTransport]:
    return FakeTransport


@pytest.fixture
def timeout() -> TransportTimeout:
    return TransportTimeout()
