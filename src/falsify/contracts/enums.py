"""Status codes shared between the property, the search core and reporters."""

from enum import StrEnum


class TrialStatus(StrEnum):
    """Outcome of executing a property once."""

    PASSED = "passed"
    FALSIFIED = "falsified"
    REJECTED = "rejected"


class SearchStatus(StrEnum):
    """Terminal state of a search.

    Exactly one holds for every SearchResult. A running search has no
    result object, so there is no RUNNING member.
    """

    PASSED = "passed"
    FALSIFIED = "falsified"
    EXHAUSTED = "exhausted"
