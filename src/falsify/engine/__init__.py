"""Search engine: properties, shrinking, the search loop and reporting.

This module provides:
- Property: generator + predicate, evaluated one trial at a time
- Shrinker: decision-log shrinking toward a minimal falsification
- SearchCore: the generate / execute / shrink loop under a Strategy
- TheoryRunner: runs a search and calls the Strategy's reporter

Example:
    from falsify.core.config import Strategy
    from falsify.engine import TheoryRunner
    from falsify.generators import integers

    TheoryRunner(Strategy().with_fixed_seed(3), integers(0, 1000)).check(lambda n: n * 2 >= n)
"""

from falsify.engine.clock import DEFAULT_CLOCK, Clock, Deadline, MockClock, SystemClock
from falsify.engine.core import SearchCore
from falsify.engine.property import Property, assume
from falsify.engine.runner import TheoryRunner
from falsify.engine.shrink import Shrinker, ShrinkResult

__all__ = [
    "DEFAULT_CLOCK",
    "Clock",
    "Deadline",
    "MockClock",
    "Property",
    "SearchCore",
    "ShrinkResult",
    "Shrinker",
    "SystemClock",
    "TheoryRunner",
    "assume",
]
