# src/falsify/core/randomness.py
"""Seeded randomness and replayable decision streams.

Three pieces:

- PseudoRandom: a seeded PRNG. Its initial seed is retrievable so any run
  can be reproduced. derive() creates independent child generators without
  advancing the parent.
- ConcreteSource: the RandomnessSource a search run draws from. It records
  every draw of the current trial into a DecisionLog.
- ReplaySource: replays a DecisionLog position by position. Past the end of
  the log it either diverges onto a derived PRNG (forks) or returns each
  constraint's origin (shrink candidates), which biases replays toward the
  simplest continuation.

Determinism contract:
    Given the same seed, the same sequence of constraints produces the same
    sequence of values. Replaying a recorded log through the same generator
    produces the same composite value.
"""

from __future__ import annotations

import hashlib
import random

from falsify.contracts.constraint import Constraint
from falsify.contracts.decisions import DecisionLog, Draw
from falsify.contracts.errors import ReplayOverrun

# Draws a shrink candidate may make past its recorded decisions before it is
# abandoned. Each such draw returns the constraint's origin.
OVERRUN_ALLOWANCE = 100


def _derive_seed(seed: int, salt: int) -> int:
    digest = hashlib.blake2b(f"{seed}:{salt}".encode(), digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


class PseudoRandom:
    """Seeded pseudorandom number generator.

    Example:
        prng = PseudoRandom(42)
        source = prng.new_source(generate_attempts=10)
        prng.initial_seed  # 42, report this to reproduce the run
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def initial_seed(self) -> int:
        return self._seed

    def next_int(self, lower: int, upper: int) -> int:
        """Uniform integer in [lower, upper]."""
        return self._random.randint(lower, upper)

    def derive(self, salt: int) -> PseudoRandom:
        """Independent generator keyed on this seed and salt.

        Does not consume anything from this generator's stream.
        """
        return PseudoRandom(_derive_seed(self._seed, salt))

    def new_source(self, generate_attempts: int) -> ConcreteSource:
        return ConcreteSource(self, generate_attempts)


class ConcreteSource:
    """RandomnessSource backed by a PseudoRandom stream.

    Owned by exactly one search run. The core calls begin_trial() before
    each trial; history then holds that trial's draws, which is what a
    failing trial hands to the shrinker via fork().
    """

    def __init__(self, prng: PseudoRandom, generate_attempts: int) -> None:
        if generate_attempts < 1:
            raise ValueError(f"generate_attempts must be >= 1, got {generate_attempts}")
        self._prng = prng
        self._generate_attempts = generate_attempts
        self._failed_assumptions = 0
        self._draws: list[Draw] = []
        self._total_draws = 0

    @property
    def initial_seed(self) -> int:
        return self._prng.initial_seed

    @property
    def generate_attempts(self) -> int:
        return self._generate_attempts

    @property
    def failed_assumptions(self) -> int:
        return self._failed_assumptions

    @property
    def history(self) -> DecisionLog:
        return DecisionLog(tuple(self._draws))

    def next(self, constraint: Constraint) -> int:
        value = self._prng.next_int(constraint.lower, constraint.upper)
        self._draws.append(Draw(value, constraint))
        self._total_draws += 1
        return value

    def register_failed_assumption(self) -> None:
        self._failed_assumptions += 1

    def begin_trial(self) -> None:
        """Start recording a new trial. The PRNG stream continues."""
        self._draws = []

    def fork(self) -> ReplaySource:
        return ReplaySource(
            self.history,
            generate_attempts=self._generate_attempts,
            fallback=self._prng.derive(self._total_draws),
        )


class ReplaySource:
    """RandomnessSource that replays a recorded DecisionLog.

    Recorded values are clamped into whatever constraint the replaying
    generator asks for, so a log edited by the shrinker (or replayed by a
    generator whose structure changed because an earlier draw changed)
    always yields in-bounds values.

    Past the end of the log:
    - with a fallback PRNG, draws continue from that PRNG (divergence)
    - without one, each draw returns the constraint's origin, and after
      overrun_allowance such draws ReplayOverrun is raised
    """

    def __init__(
        self,
        decisions: DecisionLog,
        *,
        generate_attempts: int,
        fallback: PseudoRandom | None = None,
        overrun_allowance: int = OVERRUN_ALLOWANCE,
    ) -> None:
        if generate_attempts < 1:
            raise ValueError(f"generate_attempts must be >= 1, got {generate_attempts}")
        self._decisions = decisions
        self._generate_attempts = generate_attempts
        self._fallback = fallback
        self._overrun_allowance = overrun_allowance
        self._position = 0
        self._draws: list[Draw] = []
        self._failed_assumptions = 0

    @property
    def decisions(self) -> DecisionLog:
        """The log being replayed."""
        return self._decisions

    @property
    def generate_attempts(self) -> int:
        return self._generate_attempts

    @property
    def failed_assumptions(self) -> int:
        return self._failed_assumptions

    @property
    def history(self) -> DecisionLog:
        """Draws actually made so far (may differ from decisions after clamping)."""
        return DecisionLog(tuple(self._draws))

    def next(self, constraint: Constraint) -> int:
        position = self._position
        if position < len(self._decisions):
            value = constraint.clamp(self._decisions[position].value)
        elif self._fallback is not None:
            value = self._fallback.next_int(constraint.lower, constraint.upper)
        else:
            if position - len(self._decisions) >= self._overrun_allowance:
                raise ReplayOverrun(position)
            value = constraint.origin
        self._position += 1
        self._draws.append(Draw(value, constraint))
        return value

    def register_failed_assumption(self) -> None:
        self._failed_assumptions += 1

    def fork(self) -> ReplaySource:
        fallback = self._fallback.derive(self._position) if self._fallback is not None else None
        return ReplaySource(
            self.history,
            generate_attempts=self._generate_attempts,
            fallback=fallback,
            overrun_allowance=self._overrun_allowance,
        )

    def with_decisions(self, decisions: DecisionLog) -> ReplaySource:
        """Fresh replay of another log, biased toward origins past its end."""
        return ReplaySource(
            decisions,
            generate_attempts=self._generate_attempts,
            fallback=None,
            overrun_allowance=self._overrun_allowance,
        )
