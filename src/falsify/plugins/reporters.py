# src/falsify/plugins/reporters.py
"""Built-in reporters.

A reporter is told about a check's outcome at most once, and only when
the check did not pass.

- RaisingReporter: fails the host test by raising (the default)
- LoggingReporter: emits a structured warning and lets the caller continue
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from falsify.contracts.errors import PropertyFalsified, ValuesExhausted
from falsify.contracts.protocols import DisplayFn

slog = structlog.get_logger(__name__)

# Other falsifying values beyond this many are summarised by count.
MAX_EXAMPLES_SHOWN = 10


def format_falsification(
    seed: int,
    count: int,
    smallest: Any,
    cause: BaseException | None,
    examples: Sequence[Any],
    display: DisplayFn,
) -> str:
    """Render a falsification as a multi-line message."""
    lines = [
        f"Property falsified after {count} example(s)",
        "Smallest found falsifying value(s) :-",
        display(smallest),
    ]
    if cause is not None:
        lines += ["Cause was :-", f"{type(cause).__name__}: {cause}"]
    if examples:
        lines.append("Other found falsifying value(s) :- ")
        lines += [display(example) for example in examples[:MAX_EXAMPLES_SHOWN]]
        if len(examples) > MAX_EXAMPLES_SHOWN:
            lines.append(f"... and {len(examples) - MAX_EXAMPLES_SHOWN} more")
    lines += ["", f"Seed was {seed}"]
    return "\n".join(lines)


class RaisingReporter:
    """Raise PropertyFalsified / ValuesExhausted so the host test fails."""

    name = "raise"

    def falsification(
        self,
        seed: int,
        count: int,
        smallest: Any,
        cause: BaseException | None,
        examples: Sequence[Any],
        display: DisplayFn,
    ) -> None:
        message = format_falsification(seed, count, smallest, cause, examples, display)
        error = PropertyFalsified(message, seed=seed, count=count, smallest=smallest, cause=cause, examples=examples)
        if cause is not None:
            raise error from cause
        raise error

    def values_exhausted(self, completed: int) -> None:
        raise ValuesExhausted(completed)


class LoggingReporter:
    """Log outcomes as structured warnings instead of failing."""

    name = "log"

    def falsification(
        self,
        seed: int,
        count: int,
        smallest: Any,
        cause: BaseException | None,
        examples: Sequence[Any],
        display: DisplayFn,
    ) -> None:
        slog.warning(
            "property_falsified",
            seed=seed,
            count=count,
            smallest=display(smallest),
            cause=repr(cause) if cause is not None else None,
            other_examples=len(examples),
        )

    def values_exhausted(self, completed: int) -> None:
        slog.warning("values_exhausted", completed=completed)
