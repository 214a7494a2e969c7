"""Core infrastructure: randomness, bounded redraws, configuration, logging.

Settings are imported from their modules directly to keep this package
cheap to import:
    from falsify.core.config import Strategy
    from falsify.core.randomness import PseudoRandom
"""

from falsify.core.logging import configure_logging, get_logger, search_context

__all__ = [
    "configure_logging",
    "get_logger",
    "search_context",
]
