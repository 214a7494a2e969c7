# src/falsify/engine/property.py
"""Property: a generator coupled with the predicate that must hold for its values.

Property.test() runs one trial and returns a tagged TrialOutcome:

- PASSED: predicate returned True
- FALSIFIED: predicate returned False or raised; the error is kept as data
- REJECTED: predicate called assume() with a false condition

Generation-level signals (GenerationExhausted, ReplayOverrun) are not
outcomes of the predicate and propagate to the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from falsify.contracts.errors import AssumptionViolated
from falsify.contracts.results import TrialOutcome

if TYPE_CHECKING:
    from falsify.contracts.protocols import RandomnessSource
    from falsify.generators.gen import Gen

T = TypeVar("T")


def assume(condition: bool) -> None:
    """Discard the current trial unless condition holds.

    For use inside a predicate. A discarded trial does not count toward
    the examples budget.

    Raises:
        AssumptionViolated: If condition is false
    """
    if not condition:
        raise AssumptionViolated()


@dataclass(frozen=True)
class Property(Generic[T]):
    """Immutable pairing of a predicate and the generator it is checked against."""

    predicate: Callable[[T], bool]
    gen: Gen[T]

    @classmethod
    def from_assertion(cls, check: Callable[[T], Any], gen: Gen[T]) -> Property[T]:
        """Property from a function that signals failure only by raising."""

        def predicate(value: T) -> bool:
            check(value)
            return True

        return cls(predicate, gen)

    def test(self, source: RandomnessSource) -> TrialOutcome[T]:
        """Generate one value from source and check it.

        Raises:
            TypeError: If the predicate returns something other than a bool
            GenerationExhausted: If a filtered generator ran out of attempts
            ReplayOverrun: If source is a replay that ran past its decisions
        """
        value = self.gen.generate(source)
        try:
            holds = self.predicate(value)
        except AssumptionViolated:
            return TrialOutcome.rejected(value)
        except Exception as e:
            return TrialOutcome.falsified(value, e)

        if not isinstance(holds, bool):
            raise TypeError(
                f"Property predicate must return bool, got {type(holds).__name__}: {holds!r}. "
                "Use Property.from_assertion() for functions that only raise on failure."
            )
        if holds:
            return TrialOutcome.passed(value)
        return TrialOutcome.falsified(value)
