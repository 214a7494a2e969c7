# src/falsify/plugins/guidance.py
"""Built-in guidance strategies.

Guidance is the extension point for feedback-directed sampling. The search
core creates one instance per run from a GuidanceFactory (here, the class
itself, called with the run's seeded generator) and consults it after every
trial. Suggested decision logs are replayed before any fresh draws.

- NoGuidance: uniform sampling; never suggests anything (the default)
- BoundaryGuidance: after each fresh passing trial, replays it once with a
  single decision pushed to its constraint's lower or upper bound
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from falsify.contracts.decisions import DecisionLog
    from falsify.contracts.protocols import SeededRandom
    from falsify.contracts.results import TrialOutcome

# Salt for the guidance PRNG. Engine fork salts are always non-negative.
_GUIDANCE_SALT = -1


class NoGuidance:
    """Guidance that leaves sampling uniform."""

    name = "none"

    def __init__(self, prng: SeededRandom | None = None) -> None:
        pass

    def example_executed(self, log: DecisionLog, outcome: TrialOutcome[Any]) -> None:
        pass

    def suggest_values(self, executed: int, log: DecisionLog) -> Sequence[DecisionLog]:
        return ()

    def example_complete(self) -> None:
        pass


class BoundaryGuidance:
    """Probe constraint bounds next to values that already passed.

    Off-by-one and overflow bugs live at the edges of input ranges, which
    uniform draws over wide ranges rarely hit. For each fresh trial that
    passes, one decision is chosen and replayed at its lower or upper bound,
    with the rest of the trial unchanged.

    Suggestions are never made from a trial that was itself a suggestion,
    so at most every other trial is a boundary replay.
    """

    name = "boundary"

    def __init__(self, prng: SeededRandom) -> None:
        self._prng = prng.derive(_GUIDANCE_SALT)
        self._outstanding = 0
        self._current_is_suggestion = False

    def example_executed(self, log: DecisionLog, outcome: TrialOutcome[Any]) -> None:
        # Suggestions are replayed first and in order, so the next trials
        # after handing some out are exactly those suggestions.
        self._current_is_suggestion = self._outstanding > 0
        if self._current_is_suggestion:
            self._outstanding -= 1

    def suggest_values(self, executed: int, log: DecisionLog) -> Sequence[DecisionLog]:
        if self._current_is_suggestion or len(log) == 0:
            return ()
        index = self._prng.next_int(0, len(log) - 1)
        constraint = log[index].constraint
        bound = constraint.upper if self._prng.next_int(0, 1) == 1 else constraint.lower
        candidate = log.replace_at(index, bound)
        if candidate == log:
            return ()
        self._outstanding += 1
        return (candidate,)

    def example_complete(self) -> None:
        self._current_is_suggestion = False
