"""Rate limiting of sent packets."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

_NS_PER_SECOND = 1_000_000_000


class Limiter(ABC):
    """Something that paces a stream of events."""

    @abstractmethod
    def increment(self) -> None:
        """Block until the next event may happen."""


class BasicLimiter(Limiter):
    """Spaces events evenly at a fixed number per second, across threads."""

    def __init__(
        self,
        per_second: int,
        *,
        clock: Callable[[], int] = time.monotonic_ns,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if per_second <= 0:
            raise ValueError(f"per_second must be positive, got {per_second}")
        self._clock = clock
        self._sleep = sleep
        self._delay = _NS_PER_SECOND // per_second
        self._next = clock()
        self._lock = threading.Lock()

    @property
    def delay_ns(self) -> int:
        return self._delay

    def increment(self) -> None:
        with self._lock:
            wait = self._next - self._clock()
            if wait > 0:
                self._sleep(wait / _NS_PER_SECOND)
            self._next += self._delay