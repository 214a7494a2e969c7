"""Exception taxonomy.

Control flow signals (GenerationExhausted, ReplayOverrun, AssumptionViolated)
are raised inside a single trial and always handled by the engine; they never
escape SearchCore.run(). ConfigurationError surfaces at construction time.
PropertyFalsified and ValuesExhausted are what the default reporter raises
to fail the host test.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class ConfigurationError(ValueError):
    """Raised when a Strategy, profile or plugin lookup is invalid.

    Always raised while building configuration, never during a run.
    """


# =============================================================================
# Control Flow Exceptions
# =============================================================================


class GenerationExhausted(Exception):
    """Raised when a filtered draw was rejected on every allowed attempt.

    The search core converts this into an EXHAUSTED result.

    Attributes:
        attempts: Number of draws made before giving up
    """

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Assumption rejected {attempts} consecutive draws")


class ReplayOverrun(Exception):
    """Raised when a replay source runs too far past its recorded decisions.

    A shrink candidate that triggers this cannot reproduce a falsification
    and is discarded.

    Attributes:
        position: Index of the draw that exceeded the allowance
    """

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Replay ran past recorded decisions at draw {position}")


class AssumptionViolated(Exception):
    """Raised by assume() when a predicate-level assumption does not hold."""


# =============================================================================
# Reporting Exceptions
# =============================================================================


class PropertyFalsified(AssertionError):
    """Raised by RaisingReporter when a falsifying example was found.

    Attributes:
        seed: Seed that reproduces the run
        count: Examples executed before falsification
        smallest: Smallest falsifying value found
        cause: Error raised by the predicate for the first falsification, if any
        examples: Other distinct falsifying values
    """

    def __init__(
        self,
        message: str,
        *,
        seed: int,
        count: int,
        smallest: Any,
        cause: BaseException | None,
        examples: Sequence[Any],
    ) -> None:
        self.seed = seed
        self.count = count
        self.smallest = smallest
        self.cause = cause
        self.examples = list(examples)
        super().__init__(message)


class ValuesExhausted(AssertionError):
    """Raised by RaisingReporter when too many candidates were rejected."""

    def __init__(self, completed: int) -> None:
        self.completed = completed
        super().__init__(f"Gave up after {completed} examples: too many values were rejected by assumptions")
