# src/falsify/contracts/protocols.py
"""Protocols for the engine's collaborators.

These protocols define the seams between the search core and the things
it consumes: the randomness it draws from, the reporter it hands terminal
outcomes to, and the guidance hook that may steer sampling. They are used
for type checking; implementations do not need to inherit from them.

Collaborators:
- RandomnessSource: bounded draws, assumption bookkeeping, replay forks
- Reporter: told about non-passing outcomes (at most once per check)
- SeededRandom: the run's seeded generator, handed to a GuidanceFactory
- Guidance: per-run sampling hook, built by a GuidanceFactory
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from falsify.contracts.constraint import Constraint
    from falsify.contracts.decisions import DecisionLog
    from falsify.contracts.results import TrialOutcome

DisplayFn = Callable[[Any], str]


@runtime_checkable
class RandomnessSource(Protocol):
    """Source of bounded pseudorandom draws for generators.

    Draws must be a deterministic function of the seed and every draw made
    before them, so that a recorded history replays into the same values.
    """

    @property
    def generate_attempts(self) -> int:
        """Maximum draws a filtered generator may make for one value."""
        ...

    @property
    def failed_assumptions(self) -> int:
        """Number of times register_failed_assumption() was called."""
        ...

    @property
    def history(self) -> DecisionLog:
        """Draws recorded for the current trial, in order."""
        ...

    def next(self, constraint: Constraint) -> int:
        """Return a value within the constraint's bounds."""
        ...

    def register_failed_assumption(self) -> None:
        """Count one rejected candidate. Never raises."""
        ...

    def fork(self) -> RandomnessSource:
        """Return an independent source that replays the history so far.

        The fork can diverge after the replayed history without touching
        this source's stream.
        """
        ...


@runtime_checkable
class SeededRandom(Protocol):
    """Seeded generator a run is driven by; guidance derives its own from it."""

    @property
    def initial_seed(self) -> int: ...

    def next_int(self, lower: int, upper: int) -> int: ...

    def derive(self, salt: int) -> SeededRandom:
        """Independent generator keyed on this seed and salt."""
        ...


@runtime_checkable
class Reporter(Protocol):
    """Receives the outcome of a check that did not pass.

    Called at most once per check, and never for a passing run.
    """

    def falsification(
        self,
        seed: int,
        count: int,
        smallest: Any,
        cause: BaseException | None,
        examples: Sequence[Any],
        display: DisplayFn,
    ) -> None:
        """Report a falsified property.

        Args:
            seed: Seed that reproduces the run
            count: Examples executed before falsification
            smallest: Smallest falsifying value
            cause: Error raised by the predicate, if it raised
            examples: Other distinct falsifying values
            display: Renders a value as text
        """
        ...

    def values_exhausted(self, completed: int) -> None:
        """Report that generation gave up after completed examples."""
        ...


@runtime_checkable
class Guidance(Protocol):
    """Feedback hook that may steer later draws from earlier outcomes.

    One instance is created per run. Every trial, rejected or not, is reported
    to example_executed(). After a trial that was not rejected the core asks
    suggest_values() for decision logs to replay before drawing fresh values,
    then calls example_complete().
    """

    def example_executed(self, log: DecisionLog, outcome: TrialOutcome[Any]) -> None: ...

    def suggest_values(self, executed: int, log: DecisionLog) -> Sequence[DecisionLog]: ...

    def example_complete(self) -> None: ...


GuidanceFactory = Callable[[SeededRandom], Guidance]
