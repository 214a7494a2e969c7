"""
Falsify: property-based testing with reproducible seeds and shrinking.

A property is a predicate over generated values. The engine draws many
candidate inputs, stops at the first falsifying example, and shrinks it
toward a minimal failing case that replays identically from its seed.
"""

__version__ = "0.1.0"
