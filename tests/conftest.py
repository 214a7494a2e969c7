# tests/conftest.py
"""Shared test fixtures and helpers.

Test Doubles:
- ScriptedSource: RandomnessSource returning a fixed script of values
- RecordingReporter: Reporter that records calls instead of raising
- RecordingGuidance: Guidance that records hook calls and hands out
  pre-arranged suggestions
- Cycling: generator cycling through fixed values, ignoring its source
- log_events: structlog events captured with bound contextvars merged in

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from typing import Any

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings
from structlog.testing import LogCapture

from falsify.contracts import Constraint, DecisionLog, Draw, TrialOutcome
from falsify.contracts.protocols import DisplayFn
from falsify.core.config import Strategy
from falsify.core.randomness import PseudoRandom, ReplaySource
from falsify.engine import MockClock
from falsify.generators import Gen

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Test Doubles
# =============================================================================


class ScriptedSource:
    """RandomnessSource that returns the scripted values in order.

    Each value is clamped into the requested constraint. Running off the
    end of the script fails the test loudly.
    """

    def __init__(self, *values: int, generate_attempts: int = 10) -> None:
        self._values = list(values)
        self._position = 0
        self._draws: list[Draw] = []
        self._generate_attempts = generate_attempts
        self._failed_assumptions = 0

    @property
    def generate_attempts(self) -> int:
        return self._generate_attempts

    @property
    def failed_assumptions(self) -> int:
        return self._failed_assumptions

    @property
    def history(self) -> DecisionLog:
        return DecisionLog(tuple(self._draws))

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def next(self, constraint: Constraint) -> int:
        if self._position >= len(self._values):
            raise AssertionError(f"ScriptedSource ran out of values after {self._position} draws")
        value = constraint.clamp(self._values[self._position])
        self._position += 1
        self._draws.append(Draw(value, constraint))
        return value

    def register_failed_assumption(self) -> None:
        self._failed_assumptions += 1

    def fork(self) -> ReplaySource:
        return ReplaySource(self.history, generate_attempts=self._generate_attempts)


class Cycling(Gen[int]):
    """Generator that cycles through values without drawing from the source."""

    def __init__(self, *values: int) -> None:
        self._values = values
        self._index = 0

    def generate(self, source: Any) -> int:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


class RecordingReporter:
    """Reporter that records every call."""

    name = "recording"

    def __init__(self) -> None:
        self.falsifications: list[dict[str, Any]] = []
        self.exhausted: list[int] = []

    def falsification(
        self,
        seed: int,
        count: int,
        smallest: Any,
        cause: BaseException | None,
        examples: Sequence[Any],
        display: DisplayFn,
    ) -> None:
        self.falsifications.append(
            {
                "seed": seed,
                "count": count,
                "smallest": smallest,
                "cause": cause,
                "examples": list(examples),
                "display": display,
            }
        )

    def values_exhausted(self, completed: int) -> None:
        self.exhausted.append(completed)

    @property
    def calls(self) -> int:
        return len(self.falsifications) + len(self.exhausted)


class RecordingGuidance:
    """Guidance that records hook calls and suggests pre-arranged logs.

    suggestions maps the executed count passed to suggest_values() to the
    logs returned for it.
    """

    def __init__(self, suggestions: dict[int, Sequence[DecisionLog]] | None = None) -> None:
        self.suggestions = suggestions or {}
        self.executed_outcomes: list[TrialOutcome[Any]] = []
        self.suggest_calls: list[int] = []
        self.completed = 0

    def __call__(self, prng: PseudoRandom) -> RecordingGuidance:
        return self

    def example_executed(self, log: DecisionLog, outcome: TrialOutcome[Any]) -> None:
        self.executed_outcomes.append(outcome)

    def suggest_values(self, executed: int, log: DecisionLog) -> Sequence[DecisionLog]:
        self.suggest_calls.append(executed)
        return self.suggestions.get(executed, ())

    def example_complete(self) -> None:
        self.completed += 1


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def strategy(reporter: RecordingReporter) -> Strategy:
    """Reproducible strategy that records instead of raising."""
    return Strategy().with_fixed_seed(42).with_examples(200).with_reporter(reporter)


@pytest.fixture
def clock() -> MockClock:
    return MockClock(start=100.0)


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Restore stdlib and structlog configuration after a test reconfigures them."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def log_events() -> Iterator[list[dict[str, Any]]]:
    """Captured structlog events, with contextvars merged as configure_logging() does."""
    capture = LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    yield capture.entries
    structlog.reset_defaults()
