"""Generator algebra and primitive generators.

Example:
    from falsify.generators import integers, lists

    sorted_lists = lists(integers(-100, 100)).map(sorted)
"""

from falsify.generators.gen import FunctionGen, Gen
from falsify.generators.generate import (
    booleans,
    constant,
    frequency,
    integers,
    lists,
    one_of,
    pick,
    strings,
    tuples,
)

__all__ = [
    "FunctionGen",
    "Gen",
    "booleans",
    "constant",
    "frequency",
    "integers",
    "lists",
    "one_of",
    "pick",
    "strings",
    "tuples",
]
