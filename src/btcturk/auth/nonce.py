"""Monotonic, timestamp-derived nonce source.

The exchange rejects reused stamps inside its tolerance window. Two requests
in the same millisecond would collide on a plain timestamp, so the next
stamp is ``max(now_ms, last + 1)``: it tracks wall time but never repeats or
goes backwards, even if the clock does.
"""

import threading
import time
from collections.abc import Callable


def wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class MonotonicNonce:
    """Thread-safe strictly increasing millisecond stamp generator.

    Args:
        clock_ms: Millisecond clock. Injected in tests to make stamps
            deterministic.
    """

    def __init__(self, clock_ms: Callable[[], int] = wall_clock_ms) -> None:
        self._clock_ms = clock_ms
        self._last = 0
        self._lock = threading.Lock()

    @property
    def last(self) -> int:
        """The most recently issued stamp (0 before the first call)."""
        return self._last

    def next_nonce(self) -> int:
        with self._lock:
            stamp = max(int(self._clock_ms()), self._last + 1)
            self._last = stamp
            return stamp
