"""Strictly increasing nonce issuance for private calls."""
import threading
import time
from typing import Callable, Optional


def _clock_millis() -> int:
    return int(time.time() * 1000)


class NonceSource:
    """Issue nonces as milliseconds since the Unix epoch, never repeating.

    Two calls inside the same millisecond would read the same clock value,
    so each issued nonce is at least one above the previous one. The
    read-modify-write runs under a lock so concurrent callers sharing one
    client never receive equal or decreasing values.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None, start: int = 0):
        self._clock = clock or _clock_millis
        self._last = start
        self._lock = threading.Lock()

    @property
    def last_issued(self) -> int:
        return self._last

    def next(self) -> int:
        with self._lock:
            nonce = max(self._clock(), self._last + 1)
            self._last = nonce
            return nonce
