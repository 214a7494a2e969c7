# src/falsify/core/retry.py
"""RetryManager: bounded redraw of rejected candidates, with tenacity.

Filtered generators (Gen.assuming) draw a candidate, test it, and draw
again when it is rejected. The number of draws per value is bounded by the
source's generate_attempts budget; exceeding it raises GenerationExhausted,
which the search core reports as an EXHAUSTED outcome instead of looping.

Redraws never wait: rejection is a sampling decision, not a transient fault.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt, wait_none

from falsify.contracts.errors import GenerationExhausted

T = TypeVar("T")


class _Rejected(Exception):
    """Internal signal: the drawn candidate failed the acceptance test."""


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for redraw behavior.

    max_attempts is the TOTAL number of draws, not the number of redraws.
    So max_attempts=3 means: draw, redraw, redraw (3 total).
    """

    max_attempts: int = 10

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")


class RetryManager:
    """Draws until a candidate is accepted or the attempt budget runs out.

    Example:
        manager = RetryManager(RetryConfig(max_attempts=source.generate_attempts))

        value = manager.draw_until(
            lambda: parent.generate(source),
            accept=predicate,
            on_reject=lambda attempt: source.register_failed_assumption(),
        )
    """

    def __init__(self, config: RetryConfig) -> None:
        self._config = config

    def draw_until(
        self,
        draw: Callable[[], T],
        *,
        accept: Callable[[T], bool],
        on_reject: Callable[[int], None] | None = None,
    ) -> T:
        """Draw candidates until one is accepted.

        Args:
            draw: Produces one candidate
            accept: Returns True for an acceptable candidate
            on_reject: Called with the 1-based attempt number of every rejection

        Returns:
            The first accepted candidate

        Raises:
            GenerationExhausted: If every allowed draw was rejected
            Exception: Anything raised by draw() or accept() propagates unchanged
        """
        try:
            for attempt_state in Retrying(
                stop=stop_after_attempt(self._config.max_attempts),
                wait=wait_none(),
                retry=retry_if_exception_type(_Rejected),
                reraise=False,  # We catch RetryError and convert to GenerationExhausted
            ):
                with attempt_state:
                    candidate = draw()
                    if accept(candidate):
                        return candidate
                    if on_reject is not None:
                        on_reject(attempt_state.retry_state.attempt_number)
                    raise _Rejected
        except RetryError as e:
            raise GenerationExhausted(self._config.max_attempts) from e

        # Should not reach here - Retrying always returns or raises
        raise RuntimeError("Unexpected state in redraw loop")  # pragma: no cover
