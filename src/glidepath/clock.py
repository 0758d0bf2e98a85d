"""Monotonic time source for the frame loop."""

from __future__ import annotations
import time
from typing import Callable

from .errors import ClockReadError


class MonotonicClock:
    """Reads monotonic seconds from an arbitrary epoch.

    The motion controller remembers when each segment started and subtracts,
    so only differences between readings matter.
    """

    def __init__(self, timer: Callable[[], float] = time.perf_counter):
        self._timer = timer

    def now(self) -> float:
        try:
            return float(self._timer())
        except OSError as exc:
            raise ClockReadError(f"Cannot read monotonic clock: {exc}") from exc
