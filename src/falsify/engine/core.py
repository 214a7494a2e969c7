# src/falsify/engine/core.py
"""SearchCore: the generate / execute / shrink loop.

States: RUNNING -> {FALSIFIED, EXHAUSTED, PASSED}

Per trial:
1. Stop if the examples budget is reached, or the time budget (when > 0)
   has elapsed, whichever comes first.
2. Draw and execute a trial through the Property. Trials suggested by the
   Guidance are replayed before fresh draws.
3. REJECTED: retry without consuming the examples budget; after
   generate_attempts consecutive rejections, stop as EXHAUSTED.
4. FALSIFIED: stop generating and shrink; the result is FALSIFIED.
5. A filtered generator running out of attempts stops the run as EXHAUSTED.

Running out of budget without a falsification is PASSED.

A run owns one ConcreteSource and one Guidance; nothing is shared between
runs, so independent checks may run concurrently in separate threads.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, TypeVar

import structlog

from falsify.contracts.errors import GenerationExhausted
from falsify.contracts.results import SearchResult
from falsify.core.logging import search_context
from falsify.core.randomness import ReplaySource
from falsify.engine.clock import DEFAULT_CLOCK, Deadline
from falsify.engine.shrink import Shrinker

if TYPE_CHECKING:
    from falsify.contracts.decisions import DecisionLog
    from falsify.contracts.protocols import RandomnessSource
    from falsify.contracts.results import TrialOutcome
    from falsify.core.config import Strategy
    from falsify.core.randomness import PseudoRandom
    from falsify.engine.clock import Clock
    from falsify.engine.property import Property
    from falsify.engine.shrink import ShrinkResult

T = TypeVar("T")

slog = structlog.get_logger(__name__)


class SearchCore:
    """Runs one property search under a Strategy's budgets.

    Example:
        core = SearchCore(Strategy().with_fixed_seed(1).with_examples(100))
        result = core.run(Property(lambda n: n < 50, integers(0, 100)))
        result.is_falsified, result.smallest  # (True, 50)
    """

    def __init__(self, strategy: Strategy, clock: Clock | None = None) -> None:
        """Initialize with strategy.

        Args:
            strategy: Budgets and collaborators for the run
            clock: Optional clock for time budgets. Defaults to system clock.
                   Inject MockClock for deterministic testing.
        """
        self._strategy = strategy
        self._clock = clock if clock is not None else DEFAULT_CLOCK

    def run(self, prop: Property[T]) -> SearchResult[T]:
        """Search for a falsification of prop.

        Every event logged during the search, shrinking included, carries
        the run's seed.

        Returns:
            SearchResult with exactly one of passed / falsified / exhausted
        """
        prng = self._strategy.prng()
        with search_context(prng.initial_seed):
            return self._search(prop, prng)

    def _search(self, prop: Property[T], prng: PseudoRandom) -> SearchResult[T]:
        strategy = self._strategy
        seed = prng.initial_seed
        source = prng.new_source(strategy.generate_attempts)
        guidance = strategy.guidance_factory(prng)
        suggested: deque[DecisionLog] = deque()

        slog.debug(
            "search_started",
            examples=strategy.examples,
            testing_time_seconds=strategy.testing_time_seconds,
            shrink_cycles=strategy.shrink_cycles,
            generate_attempts=strategy.generate_attempts,
        )

        deadline = Deadline(strategy.testing_time_seconds if strategy.has_time_budget else None, self._clock)
        executed = 0
        trials = 0
        rejections = 0

        while not self._budget_spent(executed, deadline):
            trial: RandomnessSource
            if suggested:
                trial = ReplaySource(
                    suggested.popleft(),
                    generate_attempts=strategy.generate_attempts,
                    fallback=prng.derive(trials),
                )
            else:
                source.begin_trial()
                trial = source
            trials += 1

            try:
                outcome = prop.test(trial)
            except GenerationExhausted as e:
                slog.info("search_exhausted", executed=executed, reason="generator", attempts=e.attempts)
                return SearchResult.exhausted(executed, seed)

            log = trial.history
            guidance.example_executed(log, outcome)

            if outcome.is_rejected:
                rejections += 1
                if rejections >= strategy.generate_attempts:
                    slog.info("search_exhausted", executed=executed, reason="predicate", rejections=rejections)
                    return SearchResult.exhausted(executed, seed)
                continue

            rejections = 0
            executed += 1

            if outcome.is_falsified:
                return self._falsified(prop, trial, outcome, executed, seed)

            suggested.extend(guidance.suggest_values(executed, log))
            guidance.example_complete()

        slog.info("search_passed", executed=executed)
        return SearchResult.passed(executed, seed)

    def _budget_spent(self, executed: int, deadline: Deadline) -> bool:
        examples = self._strategy.examples
        if examples >= 0 and executed >= examples:
            return True
        return deadline.expired()

    def _falsified(
        self,
        prop: Property[T],
        trial: RandomnessSource,
        outcome: TrialOutcome[T],
        executed: int,
        seed: int,
    ) -> SearchResult[T]:
        shrinker = Shrinker(prop, cycles=self._strategy.shrink_cycles)
        shrunk = shrinker.shrink(_as_replay(trial), outcome)
        others = _distinct_others(shrunk)
        slog.info(
            "search_falsified",
            executed=executed,
            shrink_cycles=shrunk.cycles,
            other_falsifications=len(others),
        )
        return SearchResult.falsified(
            executed,
            seed,
            smallest=shrunk.smallest,
            error=outcome.error,
            falsifications=others,
        )


def _as_replay(trial: RandomnessSource) -> ReplaySource:
    fork = trial.fork()
    if not isinstance(fork, ReplaySource):
        raise TypeError(f"fork() must return a ReplaySource, got {type(fork).__name__}")
    return fork


def _distinct_others(shrunk: ShrinkResult[T]) -> tuple[T, ...]:
    """Falsifying values other than the smallest, distinct, simplest log first."""
    ordered = sorted(shrunk.falsifications, key=lambda seen: seen[0].sort_key())
    others: list[T] = []
    for _, value in ordered:
        if value != shrunk.smallest and value not in others:
            others.append(value)
    return tuple(others)
