# src/falsify/contracts/maybe.py
"""Present/absent box produced by Gen.to_optionals()."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class Maybe(Generic[T]):
    """A value that may be absent.

    None is a legitimate present value, so absence is tracked separately.

    Example:
        Maybe.of(3).is_present        # True
        Maybe.empty().get_or(0)       # 0
    """

    _value: object = _MISSING

    @classmethod
    def of(cls, value: T) -> Maybe[T]:
        return cls(value)

    @classmethod
    def empty(cls) -> Maybe[T]:
        return cls()

    @property
    def is_present(self) -> bool:
        return self._value is not _MISSING

    def get(self) -> T:
        """Return the boxed value.

        Raises:
            ValueError: If the box is empty.
        """
        if self._value is _MISSING:
            raise ValueError("Maybe is empty")
        return self._value  # type: ignore[return-value]

    def get_or(self, default: T) -> T:
        if self._value is _MISSING:
            return default
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self._value is _MISSING:
            return "Maybe.empty()"
        return f"Maybe.of({self._value!r})"

    def __str__(self) -> str:
        if self._value is _MISSING:
            return "empty"
        return str(self._value)
