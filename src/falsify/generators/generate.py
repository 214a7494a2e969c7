# src/falsify/generators/generate.py
"""Primitive generators.

Each primitive draws through Constraints whose origin is its natural
"smallest" value, so shrinking a decision log moves values toward:

- integers: zero, or the bound nearest zero
- booleans: False
- pick / one_of / frequency: the first choice
- lists / strings: min_size, with each element at its own origin
"""

from __future__ import annotations

import string
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from falsify.contracts.constraint import INT64_MAX, INT64_MIN, Constraint
from falsify.generators.gen import Gen

if TYPE_CHECKING:
    from falsify.contracts.protocols import RandomnessSource

T = TypeVar("T")


def constant(value: T) -> Gen[T]:
    """Always value. Makes no draws."""
    return Gen.of(lambda source: value)


def integers(lower: int = INT64_MIN, upper: int = INT64_MAX) -> Gen[int]:
    """Integers in [lower, upper]."""
    constraint = Constraint.between(lower, upper)
    return Gen.of(lambda source: source.next(constraint))


def booleans() -> Gen[bool]:
    constraint = Constraint.between(0, 1)
    return Gen.of(lambda source: source.next(constraint) == 1)


def pick(values: Sequence[T]) -> Gen[T]:
    """One of values, shrinking toward the first.

    Raises:
        ValueError: If values is empty
    """
    if not values:
        raise ValueError("pick() needs at least one value")
    choices = tuple(values)
    constraint = Constraint.between(0, len(choices) - 1)
    return Gen.of(lambda source: choices[source.next(constraint)])


def one_of(*gens: Gen[T]) -> Gen[T]:
    """Delegate to one of gens, chosen uniformly, shrinking toward the first."""
    if not gens:
        raise ValueError("one_of() needs at least one generator")
    constraint = Constraint.between(0, len(gens) - 1)
    return Gen.of(lambda source: gens[source.next(constraint)].generate(source))


def frequency(*weighted: tuple[int, Gen[T]]) -> Gen[T]:
    """Delegate to a generator chosen in proportion to its weight.

    Example:
        frequency((9, integers(0, 9)), (1, constant(-1)))

    Raises:
        ValueError: If no pairs are given or any weight is not positive
    """
    if not weighted:
        raise ValueError("frequency() needs at least one (weight, generator) pair")
    for weight, _ in weighted:
        if weight < 1:
            raise ValueError(f"frequency() weights must be positive, got {weight}")
    total = sum(weight for weight, _ in weighted)
    constraint = Constraint.between(0, total - 1)

    def draw(source: RandomnessSource) -> T:
        roll = source.next(constraint)
        for weight, gen in weighted:
            if roll < weight:
                return gen.generate(source)
            roll -= weight
        raise AssertionError("unreachable: roll exceeded total weight")  # pragma: no cover

    return Gen.of(draw)


def lists(element: Gen[T], min_size: int = 0, max_size: int = 10) -> Gen[list[T]]:
    """Lists of element values. The length is drawn first, then each element."""
    if min_size < 0 or min_size > max_size:
        raise ValueError(f"Invalid list size range [{min_size}, {max_size}]")
    length = Constraint.between(min_size, max_size).with_origin(min_size)

    def draw(source: RandomnessSource) -> list[T]:
        size = source.next(length)
        return [element.generate(source) for _ in range(size)]

    return Gen.of(draw)


def strings(alphabet: str = string.ascii_lowercase, min_size: int = 0, max_size: int = 10) -> Gen[str]:
    """Strings over alphabet, shrinking toward short runs of its first character."""
    return lists(pick(alphabet), min_size, max_size).map("".join)


def tuples(first: Gen[Any], *rest: Gen[Any]) -> Gen[tuple[Any, ...]]:
    if not rest:
        return first.map(lambda value: (value,))
    return first.zip(*rest, combine=lambda *values: tuple(values))
