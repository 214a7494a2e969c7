# src/falsify/generators/gen.py
"""The generator algebra.

A Gen is a pure, immutable description of how to produce a value from a
RandomnessSource. It has exactly one required operation, generate(); every
combinator returns a new FunctionGen wrapping a closure over its parents.
No generator mutates another.

Draw order is part of the contract. Each combinator draws from the source
in a fixed structural order (zip: left to right; flat_map: outer then
inner; mix/to_optionals: selector first), so replaying an identical
decision history always rebuilds an identical composite value. Shrinking
depends on this.

Display:
    as_string() renders values for reporting. A display function attached
    with described_as() survives assuming() (same values) but is dropped by
    map() and the other combinators that produce a new value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from falsify.contracts.constraint import Constraint
from falsify.contracts.maybe import Maybe
from falsify.core.retry import RetryConfig, RetryManager

if TYPE_CHECKING:
    from falsify.contracts.protocols import DisplayFn, RandomnessSource

T = TypeVar("T")
U = TypeVar("U")


def _check_percentage(name: str, value: int) -> None:
    if not 0 <= value <= 100:
        raise ValueError(f"{name} must be between 0 and 100, got {value}")


class Gen(ABC, Generic[T]):
    """Lazy, composable producer of values of type T.

    Subclasses implement generate(). Everything else is built on it.

    Example:
        evens = integers(0, 1000).assuming(lambda i: i % 2 == 0)
        pairs = evens.zip(booleans(), combine=lambda n, flag: (n, flag))
        labelled = pairs.described_as(lambda p: f"n={p[0]} flag={p[1]}")
    """

    @abstractmethod
    def generate(self, source: RandomnessSource) -> T:
        """Produce one value using draws from source."""

    def as_string(self, value: T) -> str:
        """Render a value for reporting. None renders as 'null'."""
        if value is None:
            return "null"
        return str(value)

    @staticmethod
    def of(fn: Callable[[RandomnessSource], U], display: DisplayFn | None = None) -> Gen[U]:
        """Wrap a plain callable as a generator."""
        return FunctionGen(fn, display)

    def map(self, fn: Callable[[T], U]) -> Gen[U]:
        """Transform each drawn value. Drops any attached display function."""
        return FunctionGen(lambda source: fn(self.generate(source)))

    def flat_map(self, fn: Callable[[T], Gen[U]]) -> Gen[U]:
        """Draw a value, then delegate to the generator it selects on the same source."""
        return FunctionGen(lambda source: fn(self.generate(source)).generate(source))

    def zip(self, *others: Gen[Any], combine: Callable[..., U]) -> Gen[U]:
        """Draw from this and every other generator left to right, then combine.

        Raises:
            ValueError: If no other generator is given
        """
        if not others:
            raise ValueError("zip() needs at least one other generator")
        gens: tuple[Gen[Any], ...] = (self, *others)
        return FunctionGen(lambda source: combine(*[g.generate(source) for g in gens]))

    def assuming(self, predicate: Callable[[T], bool]) -> Gen[T]:
        """Only produce values satisfying predicate.

        Each rejected draw is registered with the source and redrawn, up to
        the source's generate_attempts budget. Running out raises
        GenerationExhausted, which the search reports as exhausted.
        """

        def draw(source: RandomnessSource) -> T:
            manager = RetryManager(RetryConfig(max_attempts=source.generate_attempts))
            return manager.draw_until(
                lambda: self.generate(source),
                accept=predicate,
                on_reject=lambda _attempt: source.register_failed_assumption(),
            )

        return FunctionGen(draw, self.as_string)

    def mix(self, other: Gen[T], weight: int = 50) -> Gen[T]:
        """Pick other with probability weight percent, else self.

        The selector is drawn in [0, 100); other is used when it is below
        weight. Only the selected generator draws.
        """
        _check_percentage("weight", weight)

        def draw(source: RandomnessSource) -> T:
            if source.next(Constraint.percentage()) < weight:
                return other.generate(source)
            return self.generate(source)

        return FunctionGen(draw)

    def mutate(self, modifier: Callable[[T, RandomnessSource], T]) -> Gen[T]:
        """Perturb each value using further draws from the same source."""
        return FunctionGen(lambda source: modifier(self.generate(source), source))

    def to_optionals(self, percent_empty: int) -> Gen[Maybe[T]]:
        """Box values, producing an empty box percent_empty percent of the time."""
        _check_percentage("percent_empty", percent_empty)

        def draw(source: RandomnessSource) -> Maybe[T]:
            if source.next(Constraint.percentage()) < percent_empty:
                return Maybe.empty()
            return Maybe.of(self.generate(source))

        return FunctionGen(draw)

    def described_as(self, display: DisplayFn) -> Gen[T]:
        """Same values, rendered with display when reported."""
        return FunctionGen(self.generate, display)


class FunctionGen(Gen[T]):
    """Generator backed by a closure, with an optional display function."""

    def __init__(self, fn: Callable[[RandomnessSource], T], display: DisplayFn | None = None) -> None:
        self._fn = fn
        self._display = display

    def generate(self, source: RandomnessSource) -> T:
        return self._fn(source)

    def as_string(self, value: T) -> str:
        if self._display is None:
            return super().as_string(value)
        return self._display(value)
