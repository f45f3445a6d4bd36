from __future__ import annotations

import threading
from typing import Callable, Optional

from moodhome.utils.time import to_epoch_ms, utcnow


def wall_clock_ms() -> int:
    return to_epoch_ms(utcnow())


class InstantClock:
    """
    Issues creation instants in epoch milliseconds that never repeat or go
    backwards within the process, even when the wall clock does.
    """

    def __init__(self, source: Optional[Callable[[], int]] = None) -> None:
        self._source = source or wall_clock_ms
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            current = self._source()
            if current <= self._last:
                current = self._last + 1
            self._last = current
            return current

    def observe(self, instant: int) -> None:
        """
        Raise the floor to an instant already persisted (e.g. loaded at startup).
        """
        with self._lock:
            if instant > self._last:
                self._last = instant


clock = InstantClock()


def now_ms() -> int:
    """
    Next monotonic creation instant from the process clock.
    """
    return clock.now()
