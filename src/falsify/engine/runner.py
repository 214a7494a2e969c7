# src/falsify/engine/runner.py
"""TheoryRunner: run a search and hand the outcome to the Reporter.

The runner is the seam between a declared theory (a generator plus a
predicate) and the search core. It calls the Strategy's reporter exactly
once for a falsified or exhausted search and never for a passing one.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from falsify.engine.core import SearchCore
from falsify.engine.property import Property

if TYPE_CHECKING:
    from falsify.contracts.results import SearchResult
    from falsify.core.config import Strategy
    from falsify.engine.clock import Clock
    from falsify.generators.gen import Gen

T = TypeVar("T")


class TheoryRunner(Generic[T]):
    """Checks predicates against one generator under one Strategy.

    Example:
        runner = TheoryRunner(Strategy().with_examples(500), lists(integers()))
        runner.check(lambda xs: sorted(sorted(xs)) == sorted(xs))
    """

    def __init__(self, strategy: Strategy, gen: Gen[T], *, clock: Clock | None = None) -> None:
        self._strategy = strategy
        self._gen = gen
        self._clock = clock

    def check(self, predicate: Callable[[T], bool]) -> SearchResult[T]:
        """Search for a counterexample and report it.

        Returns:
            The search result (after the reporter has been called, if at all)
        """
        result = self.run_search(predicate)
        self._report(result)
        return result

    def check_assert(self, check: Callable[[T], Any]) -> SearchResult[T]:
        """Like check(), for functions that signal failure only by raising."""
        result = SearchCore(self._strategy, clock=self._clock).run(Property.from_assertion(check, self._gen))
        self._report(result)
        return result

    def run_search(self, predicate: Callable[[T], bool]) -> SearchResult[T]:
        """Search without reporting."""
        return SearchCore(self._strategy, clock=self._clock).run(Property(predicate, self._gen))

    def _report(self, result: SearchResult[T]) -> None:
        reporter = self._strategy.reporter
        if result.is_falsified:
            reporter.falsification(
                result.seed,
                result.executed,
                result.smallest,
                result.error,
                list(result.falsifications),
                self._gen.as_string,
            )
        elif result.was_exhausted:
            reporter.values_exhausted(result.executed)
