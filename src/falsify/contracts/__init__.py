"""Shared contracts for cross-boundary data types.

All dataclasses, enums and protocols that cross subsystem boundaries are
defined here. This package is a LEAF MODULE with no outbound dependencies
to core/engine/generators.

Import patterns:
    from falsify.contracts import Constraint, DecisionLog, SearchResult
    from falsify.core.config import Strategy   # settings live in core
"""

from falsify.contracts.constraint import INT64_MAX, INT64_MIN, Constraint
from falsify.contracts.decisions import DecisionLog, Draw
from falsify.contracts.enums import SearchStatus, TrialStatus
from falsify.contracts.errors import (
    AssumptionViolated,
    ConfigurationError,
    GenerationExhausted,
    PropertyFalsified,
    ReplayOverrun,
    ValuesExhausted,
)
from falsify.contracts.maybe import Maybe
from falsify.contracts.protocols import (
    DisplayFn,
    Guidance,
    GuidanceFactory,
    RandomnessSource,
    Reporter,
    SeededRandom,
)
from falsify.contracts.results import SearchResult, TrialOutcome

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "AssumptionViolated",
    "ConfigurationError",
    "Constraint",
    "DecisionLog",
    "DisplayFn",
    "Draw",
    "GenerationExhausted",
    "Guidance",
    "GuidanceFactory",
    "Maybe",
    "PropertyFalsified",
    "RandomnessSource",
    "ReplayOverrun",
    "Reporter",
    "SearchResult",
    "SearchStatus",
    "SeededRandom",
    "TrialOutcome",
    "TrialStatus",
    "ValuesExhausted",
]
