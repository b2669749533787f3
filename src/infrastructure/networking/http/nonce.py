"""
Nonce sources for authenticated requests.

The exchange rejects nonces that are equal to or lower than the last one it
has seen for an API key, so a nonce source must never issue the same value
twice, even when the wall clock does.
"""

import threading
import time
from typing import Callable, Optional


class MillisecondNonce:
    """
    Wall-clock millisecond nonce, strictly increasing per instance.

    Issues ``max(now_ms, last + 1)`` under a lock, so concurrent callers and
    clocks with coarse granularity still get distinct, increasing values.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._last = 0

    def __call__(self) -> int:
        with self._lock:
            now = int(self._clock() * 1000)
            self._last = now if now > self._last else self._last + 1
            return self._last


class FixedNonce:
    """Always returns the same nonce. For reproducing a known signature."""

    def __init__(self, value: int):
        self.value = value

    def __call__(self) -> int:
        return self.value
