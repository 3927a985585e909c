"""Start/stop handshake with the receiver and signal-driven shutdown."""

from __future__ import annotations

import enum
import logging
import signal
import threading
from typing import Iterable, Optional, Protocol

logger = logging.getLogger(__name__)

START_COMMAND = b"radio rx 0\r\n"
STOP_COMMAND = b"radio rxstop\r\n"


class CommandChannel(Protocol):
    """Write side of the transport used by the handshake."""

    def write_all(self, data: bytes) -> None:  # pragma: no cover - protocol
        ...


class ShutdownFlag:
    """Process-wide stop request shared by the main loop and signal handlers.

    Backed by :class:`threading.Event`; once set it is never cleared.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)

    def __bool__(self) -> bool:
        return self.is_set()


class State(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class LifecycleController:
    """Drive ``NOT_STARTED -> RUNNING -> STOPPING -> STOPPED``.

    ``interrupt`` may run from a signal handler while the main thread is in
    the middle of a read or already inside another transition; the RLock
    lets that re-entry proceed instead of deadlocking, and the state check
    makes every transition happen at most once.
    """

    def __init__(self, *, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger
        self._lock = threading.RLock()
        self._state = State.NOT_STARTED
        self._flag: Optional[ShutdownFlag] = None
        self._stop_channel: Optional[CommandChannel] = None
        self._previous_handlers: dict[int, object] = {}

    @property
    def state(self) -> State:
        return self._state

    @property
    def flag(self) -> Optional[ShutdownFlag]:
        return self._flag

    def begin(self, transport: CommandChannel, *, stop_channel: Optional[CommandChannel] = None) -> ShutdownFlag:
        """Send the start command and return a fresh (unset) flag.

        ``stop_channel`` is the handle the stop command is written to on
        interrupt; it defaults to ``transport`` itself.
        """
        with self._lock:
            if self._state is not State.NOT_STARTED:
                raise RuntimeError(f"Cannot begin from state {self._state.value}")
            self._log.info("Starting serial communication...")
            transport.write_all(START_COMMAND)
            self._flag = ShutdownFlag()
            self._stop_channel = stop_channel or transport
            self._state = State.RUNNING
            return self._flag

    def end(self, transport: CommandChannel) -> bool:
        """Send the stop command. Failures are logged, never raised."""
        try:
            transport.write_all(STOP_COMMAND)
        except Exception as exc:
            self._log.error("Failed to send stop command: %s", exc)
            return False
        self._log.info("Stopped serial communication")
        return True

    def interrupt(self) -> bool:
        """Handle an external stop request.

        Returns True only for the call that performed the transition; later
        calls (a second Ctrl+C, SIGTERM after SIGINT) do nothing.
        """
        with self._lock:
            if self._state is not State.RUNNING:
                return False
            self._state = State.STOPPING
            channel = self._stop_channel
            flag = self._flag
        if channel is not None:
            self.end(channel)
        if flag is not None:
            flag.set()
        return True

    def finish(self) -> None:
        """Mark the main loop as exited."""
        with self._lock:
            if self._state is State.NOT_STARTED:
                return
            self._state = State.STOPPED
            if self._flag is not None:
                self._flag.set()

    def install_signal_handlers(self, signals: Iterable[int] = (signal.SIGINT, signal.SIGTERM)) -> None:
        """Route the given signals to :meth:`interrupt`. Main thread only."""

        def _handler(signum, frame) -> None:
            self._log.debug("Received signal %s", signum)
            self.interrupt()

        for signum in signals:
            self._previous_handlers[signum] = signal.signal(signum, _handler)

    def restore_signal_handlers(self) -> None:
        for signum, previous in self._previous_handlers.items():
            signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous_handlers.clear()


__all__ = [
    "START_COMMAND",
    "STOP_COMMAND",
    "CommandChannel",
    "ShutdownFlag",
    "State",
    "LifecycleController",
]
