"""Opt-in debug switch and timing for the receive path.

Debug output is on when ``--debug`` is given or ``CHARTER_DEBUG`` is set;
both end up as the DEBUG level on the ``charter`` loggers, which is what
:func:`time_block` follows.
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

DEBUG_ENV_VAR = "CHARTER_DEBUG"
_TRUTHY = {"1", "true", "yes", "on"}


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when ``CHARTER_DEBUG`` asks for debug output (read on every call)."""
    env = os.environ if environ is None else environ
    return env.get(DEBUG_ENV_VAR, "").lower() in _TRUTHY


@contextmanager
def time_block(label: str, *, log: Optional[logging.Logger] = None, enabled: Optional[bool] = None) -> Iterator[None]:
    """
    Log the elapsed time of the block at DEBUG.

    ``enabled`` defaults to whether ``log`` currently emits DEBUG records, so
    the cost is one level check when debugging is off.
    """
    log = log or logger
    active = log.isEnabledFor(logging.DEBUG) if enabled is None else enabled
    if not active:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        log.debug("%s took %.3f ms", label, elapsed_ms)
