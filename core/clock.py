"""
Time providers.

All timestamps in the system are epoch milliseconds, the unit the stored
records use for ``createdAt`` and ``appliedAt``.
"""

import time
from typing import Protocol, runtime_checkable

MS_PER_DAY = 24 * 60 * 60 * 1000


@runtime_checkable
class Clock(Protocol):
    def now_ms(self) -> int:
        ...


class SystemClock:
    """Wall-clock time."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


class FixedClock:
    """Clock pinned to a given instant; advance it explicitly in tests."""

    def __init__(self, now_ms: int):
        self._now_ms = int(now_ms)

    def now_ms(self) -> int:
        return self._now_ms

    def set(self, now_ms: int) -> None:
        self._now_ms = int(now_ms)

    def advance(self, ms: int = 0, days: float = 0) -> int:
        self._now_ms += int(ms + days * MS_PER_DAY)
        return self._now_ms
