# src/falsify/contracts/decisions.py
"""Decision logs: the ordered record of every draw made during one trial.

A DecisionLog is what makes a trial replayable. Feeding the same log back
through a replay source reproduces the same composite value, because every
generator combinator draws in a fixed structural order. Shrinking works on
logs rather than on values: a simpler log replays into a simpler value.

Ordering:
    sort_key() = (total distance to origin, number of draws, per-draw distances)
    A log is simpler than another when its sort key is strictly smaller.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from falsify.contracts.constraint import Constraint


@dataclass(frozen=True, slots=True)
class Draw:
    """One recorded decision: the value returned and the constraint it was drawn under."""

    value: int
    constraint: Constraint

    def __post_init__(self) -> None:
        if not self.constraint.contains(self.value):
            raise ValueError(f"Draw value {self.value} outside constraint [{self.constraint.lower}, {self.constraint.upper}]")

    @property
    def distance(self) -> int:
        return self.constraint.distance(self.value)

    def with_value(self, value: int) -> Draw:
        return Draw(self.constraint.clamp(value), self.constraint)


@dataclass(frozen=True)
class DecisionLog:
    """Immutable, position-indexed sequence of draws."""

    draws: tuple[Draw, ...] = ()
    _key: tuple[int, int, tuple[int, ...]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        distances = tuple(d.distance for d in self.draws)
        object.__setattr__(self, "_key", (sum(distances), len(distances), distances))

    @classmethod
    def of(cls, *draws: Draw) -> DecisionLog:
        return cls(tuple(draws))

    def __len__(self) -> int:
        return len(self.draws)

    def __iter__(self) -> Iterator[Draw]:
        return iter(self.draws)

    def __getitem__(self, index: int) -> Draw:
        return self.draws[index]

    @property
    def values(self) -> tuple[int, ...]:
        return tuple(d.value for d in self.draws)

    def sort_key(self) -> tuple[int, int, tuple[int, ...]]:
        return self._key

    def is_simpler_than(self, other: DecisionLog) -> bool:
        return self._key < other._key

    def replace_at(self, index: int, value: int) -> DecisionLog:
        """Copy with the draw at index set to value (clamped into its constraint)."""
        draws = list(self.draws)
        draws[index] = draws[index].with_value(value)
        return DecisionLog(tuple(draws))

    def delete_at(self, index: int) -> DecisionLog:
        """Copy without the draw at index; later draws shift down one position."""
        return DecisionLog(self.draws[:index] + self.draws[index + 1 :])
