# src/falsify/engine/shrink.py
"""Shrinking: search for a simpler decision log that still falsifies.

Shrinking edits the failing trial's DecisionLog and replays each edited
log through the property with a replay source. Draws past the end of an
edited log return their constraint's origin, so every replay is biased
toward the simplest continuation.

Order:
    A log is simpler when its sort_key() is smaller:
    (total distance to origin, number of draws, per-draw distances).

Traversal (fixed, restarted from the top after every accepted step):
    1. delete each draw
    2. set each draw to its origin
    3. bisect each draw's distance toward its origin
    4. step each draw one unit toward its origin

A candidate is accepted only if it falsifies and the draws it actually
consumed are strictly simpler than the current log. The first accepted
candidate in traversal order wins. Shrinking stops at a local minimum (a
full traversal finds nothing) or when the cycle budget is spent; one cycle
is one property execution.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from falsify.contracts.errors import GenerationExhausted, ReplayOverrun

if TYPE_CHECKING:
    from falsify.contracts.decisions import DecisionLog
    from falsify.contracts.results import TrialOutcome
    from falsify.core.randomness import ReplaySource
    from falsify.engine.property import Property

T = TypeVar("T")

slog = structlog.get_logger(__name__)


class _BudgetSpent(Exception):
    """Internal signal: no shrink cycles left."""


@dataclass(frozen=True)
class ShrinkResult(Generic[T]):
    """Outcome of a shrink.

    Fields:
        smallest: Value replayed from the simplest falsifying log
        decisions: The simplest falsifying log
        falsifications: Every falsifying (log, value) seen, starting with the original
        cycles: Property executions spent
    """

    smallest: T
    decisions: DecisionLog
    falsifications: tuple[tuple[DecisionLog, T], ...]
    cycles: int


class Shrinker(Generic[T]):
    """Shrinks one falsifying trial of a property.

    Example:
        shrinker = Shrinker(prop, cycles=strategy.shrink_cycles)
        result = shrinker.shrink(failing_source.fork(), failing_outcome)
        result.smallest
    """

    def __init__(self, prop: Property[T], *, cycles: int) -> None:
        if cycles < 0:
            raise ValueError(f"cycles must be >= 0, got {cycles}")
        self._prop = prop
        self._budget = cycles

    def shrink(self, base: ReplaySource, first: TrialOutcome[T]) -> ShrinkResult[T]:
        """Shrink the falsification recorded in base.

        Args:
            base: Replay source over the failing trial's decisions
            first: The failing trial's outcome

        Returns:
            ShrinkResult holding the simplest falsification found
        """
        run = _ShrinkRun(self._prop, base, first, self._budget)
        try:
            while run.improve():
                pass
        except _BudgetSpent:
            slog.debug("shrink_budget_spent", cycles=run.cycles)
        return ShrinkResult(
            smallest=run.value,
            decisions=run.log,
            falsifications=tuple(run.seen),
            cycles=run.cycles,
        )


class _ShrinkRun(Generic[T]):
    """State of one shrink: the current best log and everything tried."""

    def __init__(self, prop: Property[T], base: ReplaySource, first: TrialOutcome[T], budget: int) -> None:
        self._prop = prop
        self._base = base
        self._budget = budget
        self._tried: set[DecisionLog] = set()
        self.log = base.decisions
        self.value = first.value
        self.seen: list[tuple[DecisionLog, T]] = [(self.log, first.value)]
        self.cycles = 0

    def improve(self) -> bool:
        """Run the traversal until one step is accepted. False at a local minimum."""
        passes: tuple[Callable[[], bool], ...] = (
            self._delete_draws,
            self._zero_draws,
            self._bisect_draws,
            self._step_draws,
        )
        return any(shrink_pass() for shrink_pass in passes)

    def _delete_draws(self) -> bool:
        for i in range(len(self.log)):
            if self._try(self.log.delete_at(i)):
                return True
        return False

    def _zero_draws(self) -> bool:
        for i in range(len(self.log)):
            draw = self.log[i]
            if draw.distance > 0 and self._try(self.log.replace_at(i, draw.constraint.origin)):
                return True
        return False

    def _bisect_draws(self) -> bool:
        for i in range(len(self.log)):
            if self.log[i].distance <= 1:
                continue
            # Invariant: distance hi falsifies; distance lo is not known to.
            lo, hi = 0, self.log[i].distance
            improved = False
            while hi - lo > 1:
                mid = (lo + hi) // 2
                draw = self.log[i]
                if self._try(self.log.replace_at(i, draw.constraint.toward_origin(draw.value, mid))):
                    improved = True
                    if i >= len(self.log):
                        break
                    hi = self.log[i].distance
                else:
                    lo = mid
            if improved:
                return True
        return False

    def _step_draws(self) -> bool:
        for i in range(len(self.log)):
            draw = self.log[i]
            if draw.distance > 0 and self._try(
                self.log.replace_at(i, draw.constraint.toward_origin(draw.value, draw.distance - 1))
            ):
                return True
        return False

    def _try(self, candidate: DecisionLog) -> bool:
        """Replay candidate; adopt what it consumed if it falsifies and is simpler."""
        if not candidate.is_simpler_than(self.log) or candidate in self._tried:
            return False
        if self.cycles >= self._budget:
            raise _BudgetSpent()
        self._tried.add(candidate)
        self.cycles += 1

        source = self._base.with_decisions(candidate)
        try:
            outcome = self._prop.test(source)
        except (GenerationExhausted, ReplayOverrun):
            return False
        if not outcome.is_falsified:
            return False

        consumed = source.history
        self.seen.append((consumed, outcome.value))
        if not consumed.is_simpler_than(self.log):
            return False
        self.log = consumed
        self.value = outcome.value
        slog.debug("shrink_step", cycles=self.cycles, distance=consumed.sort_key()[0], draws=len(consumed))
        return True
