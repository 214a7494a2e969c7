# src/falsify/engine/clock.py
"""Clocks and the search time budget.

The search core checks its wall-clock budget between trials only; a slow
predicate call is never interrupted. Tests inject MockClock so a time
budget runs out without sleeping.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic time source in seconds.

    Implementations:
    - SystemClock: time.monotonic() (the default)
    - MockClock: advanced by hand (testing)
    """

    def monotonic(self) -> float:
        """Seconds from an arbitrary origin. Never goes backwards."""
        ...


class SystemClock:
    def monotonic(self) -> float:
        return time.monotonic()


class MockClock:
    """Clock that only moves when told to.

    Example:
        clock = MockClock(start=0.0)
        core = SearchCore(strategy.with_testing_time(1.0), clock=clock)

        # Each trial "takes" 0.4s, so the budget runs out after three
        core.run(Property(lambda x: clock.advance(0.4) or True, gen))
    """

    def __init__(self, start: float = 0.0) -> None:
        self._current = start

    def monotonic(self) -> float:
        return self._current

    def advance(self, seconds: float) -> None:
        """Move time forward.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        self._current += seconds


class Deadline:
    """Time budget for one search, started when created.

    A budget of None never expires; the examples budget alone then decides
    when the search stops.
    """

    def __init__(self, seconds: float | None, clock: Clock | None = None) -> None:
        self._seconds = seconds
        self._clock = clock if clock is not None else DEFAULT_CLOCK
        self._started = self._clock.monotonic()

    @property
    def elapsed(self) -> float:
        return self._clock.monotonic() - self._started

    def expired(self) -> bool:
        return self._seconds is not None and self.elapsed >= self._seconds


DEFAULT_CLOCK: Clock = SystemClock()
