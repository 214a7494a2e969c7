# tests/property/settings.py
"""Standardized Hypothesis settings profiles for property tests.

Provides consistent test intensity across all property test modules.
Import these instead of using inline @settings(max_examples=...).

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(seed=seeds)
    @STANDARD_SETTINGS
    def test_something(seed):
        ...

Tiers:
- DETERMINISM_SETTINGS: 300 examples - replay and seed reproducibility
- STANDARD_SETTINGS: 100 examples - Regular property tests
- SLOW_SETTINGS: 30 examples - Tests that run whole searches with shrinking
"""

from hypothesis import settings

# Replay must reproduce values exactly; shrinking depends on it
DETERMINISM_SETTINGS = settings(max_examples=300)

# Standard property tests - good balance of coverage and speed
STANDARD_SETTINGS = settings(max_examples=100)

# Each example runs a full search and shrink
SLOW_SETTINGS = settings(max_examples=30)
