"""
logline.tier1_runtime.clock
────────────────────────────
Time source for entries that are stamped inside logline: StreamBackend.log()
and LineRenderer events without a timestamp. Swap it with set_clock() to pin
rendered times in tests.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable


class Clock:
    def __init__(self, now_fn: Callable[[], datetime] | None = None) -> None:
        self._now_fn = now_fn or (lambda: datetime.now(tz=timezone.utc))

    def now(self) -> datetime:
        """Return the current UTC datetime."""
        return self._now_fn()

    @classmethod
    def frozen(cls, dt: datetime) -> "Clock":
        """A clock that always reads *dt*."""
        return cls(now_fn=lambda: dt)


_clock = Clock()


def get_clock() -> Clock:
    return _clock


def set_clock(clock: Clock) -> None:
    """Replace the clock used when no explicit one is given."""
    global _clock
    _clock = clock
