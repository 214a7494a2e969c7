# src/falsify/core/logging.py
"""Structured logging for Falsify.

The engine logs through module-level structlog loggers: search boundaries
at INFO, shrink progress at DEBUG. Nothing is configured on import; a host
test suite calls configure_logging() when it wants those events rendered.

Every event logged while a search runs carries that search's seed, bound
with search_context() and merged by the contextvars processor, so a shrink
step in the log can be tied back to the run that reproduces it.

Stdlib records (logging.getLogger(__name__)) go through the same processor
chain via ProcessorFormatter, so a host suite's own messages and falsify's
events share one format.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """ProcessorFormatter adds _record and _from_structlog; keep them out of output."""
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Render falsify's events (and stdlib records) to a stream.

    Args:
        json_output: One JSON object per line instead of key=value text.
        level: Minimum level; "DEBUG" shows search_started and shrink steps.
        stream: Destination. Defaults to sys.stdout at call time.
    """
    log_level = getattr(logging, level.upper())

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Any = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    final_processors: list[Any] = [_drop_formatter_bookkeeping, structlog.processors.format_exc_info, renderer]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Engine modules hold module-level loggers; they must see reconfiguration
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(ProcessorFormatter(processors=final_processors, foreign_pre_chain=shared_processors))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)


@contextmanager
def search_context(seed: int) -> Iterator[None]:
    """Bind seed to every event logged until the block exits.

    Nested searches (a property that itself runs a search) restore the
    outer seed on exit.
    """
    with structlog.contextvars.bound_contextvars(seed=seed):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for a module, e.g. get_logger(__name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
