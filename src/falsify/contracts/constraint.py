# src/falsify/contracts/constraint.py
"""Constraint: the range and shape of a single random draw.

Every value a generator obtains from a RandomnessSource is requested
through a Constraint. The constraint bounds the draw (inclusive on both
ends) and names an origin: the value shrinking moves toward. A draw on a
non-shrinkable constraint is never simplified.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _nearest_to_zero(lower: int, upper: int) -> int:
    if lower <= 0 <= upper:
        return 0
    if lower > 0:
        return lower
    return upper


@dataclass(frozen=True, slots=True)
class Constraint:
    """Immutable bounds for one draw.

    Attributes:
        lower: Smallest value the draw may return (inclusive).
        upper: Largest value the draw may return (inclusive).
        origin: Shrink target. Must lie within [lower, upper].
        shrinkable: False pins the draw; its distance is always 0.
    """

    lower: int
    upper: int
    origin: int
    shrinkable: bool = True

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"Constraint lower bound {self.lower} exceeds upper bound {self.upper}")
        if not self.lower <= self.origin <= self.upper:
            raise ValueError(f"Constraint origin {self.origin} outside [{self.lower}, {self.upper}]")

    @classmethod
    def between(cls, lower: int, upper: int) -> Constraint:
        """Constraint over [lower, upper] shrinking toward the value nearest zero."""
        if lower > upper:
            raise ValueError(f"Constraint lower bound {lower} exceeds upper bound {upper}")
        return cls(lower=lower, upper=upper, origin=_nearest_to_zero(lower, upper))

    @classmethod
    def none(cls) -> Constraint:
        """Unconstrained 64-bit draw shrinking toward zero."""
        return cls(lower=INT64_MIN, upper=INT64_MAX, origin=0)

    @classmethod
    def percentage(cls) -> Constraint:
        """Draw in [0, 100), used by weighted choices."""
        return cls(lower=0, upper=99, origin=0)

    def with_origin(self, origin: int) -> Constraint:
        return replace(self, origin=origin)

    def without_shrinking(self) -> Constraint:
        return replace(self, shrinkable=False)

    def contains(self, value: int) -> bool:
        return self.lower <= value <= self.upper

    def clamp(self, value: int) -> int:
        """Force value into bounds."""
        return max(self.lower, min(self.upper, value))

    def distance(self, value: int) -> int:
        """How far value is from the shrink target."""
        if not self.shrinkable:
            return 0
        return abs(value - self.origin)

    def toward_origin(self, value: int, distance: int) -> int:
        """Value at the given distance from origin, on the same side as value."""
        if value >= self.origin:
            return self.clamp(self.origin + distance)
        return self.clamp(self.origin - distance)
