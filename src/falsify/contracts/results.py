"""Trial and search outcomes.

These types answer: "What did executing a property produce?"

- TrialOutcome: one execution of the predicate (tagged PASSED/FALSIFIED/REJECTED)
- SearchResult: the terminal record of a whole search

Errors raised by the predicate travel as data inside TrialOutcome.error
and SearchResult.error; nothing is re-raised mid-search.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from falsify.contracts.enums import SearchStatus, TrialStatus

T = TypeVar("T")


@dataclass(frozen=True)
class TrialOutcome(Generic[T]):
    """Result of running the predicate against one generated value.

    Use the factory methods to create instances.

    Invariant: error is only set for FALSIFIED outcomes.
    """

    status: TrialStatus
    value: T
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.status != TrialStatus.FALSIFIED:
            raise ValueError(f"TrialOutcome with status={self.status!s} cannot carry an error")

    @classmethod
    def passed(cls, value: T) -> TrialOutcome[T]:
        return cls(status=TrialStatus.PASSED, value=value)

    @classmethod
    def falsified(cls, value: T, error: BaseException | None = None) -> TrialOutcome[T]:
        return cls(status=TrialStatus.FALSIFIED, value=value, error=error)

    @classmethod
    def rejected(cls, value: T) -> TrialOutcome[T]:
        return cls(status=TrialStatus.REJECTED, value=value)

    @property
    def is_falsified(self) -> bool:
        return self.status == TrialStatus.FALSIFIED

    @property
    def is_rejected(self) -> bool:
        return self.status == TrialStatus.REJECTED


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """Immutable outcome of one search.

    Exactly one of passed / falsified / exhausted holds, selected by status.
    smallest, error and falsifications are only meaningful (and only
    allowed) when the search falsified the property.

    Fields:
        status: Terminal state
        executed: Non-rejected trials run in the generation phase
        seed: Seed that reproduces this search
        smallest: Smallest falsifying value found by shrinking
        error: Error captured from the first falsification, if the predicate raised
        falsifications: Other distinct falsifying values seen during the run
    """

    status: SearchStatus
    executed: int
    seed: int
    smallest: T | None = None
    error: BaseException | None = None
    falsifications: tuple[T, ...] = ()

    def __post_init__(self) -> None:
        if self.executed < 0:
            raise ValueError(f"executed must be >= 0, got {self.executed}")
        if self.status != SearchStatus.FALSIFIED and (
            self.smallest is not None or self.error is not None or self.falsifications
        ):
            raise ValueError(f"SearchResult with status={self.status!s} cannot carry falsification data")

    @classmethod
    def passed(cls, executed: int, seed: int) -> SearchResult[T]:
        return cls(status=SearchStatus.PASSED, executed=executed, seed=seed)

    @classmethod
    def exhausted(cls, executed: int, seed: int) -> SearchResult[T]:
        return cls(status=SearchStatus.EXHAUSTED, executed=executed, seed=seed)

    @classmethod
    def falsified(
        cls,
        executed: int,
        seed: int,
        *,
        smallest: T,
        error: BaseException | None,
        falsifications: tuple[T, ...],
    ) -> SearchResult[T]:
        return cls(
            status=SearchStatus.FALSIFIED,
            executed=executed,
            seed=seed,
            smallest=smallest,
            error=error,
            falsifications=falsifications,
        )

    @property
    def is_falsified(self) -> bool:
        return self.status == SearchStatus.FALSIFIED

    @property
    def was_exhausted(self) -> bool:
        return self.status == SearchStatus.EXHAUSTED

    @property
    def is_passed(self) -> bool:
        return self.status == SearchStatus.PASSED
