"""
Search failure taxonomy.

Every failure a caller can see is a SearchError. Callers show
`user_message` and may offer a retry when `retryable` is set.
"""

from __future__ import annotations

from typing import Any


GENERIC_FAILURE_MESSAGE = "An error occurred during the search. Please try again later."
INVALID_IDENTIFIER_MESSAGE = (
    "Invalid property designation. Check the format (e.g. Stockholm 1:1)."
)


class SearchError(Exception):
    """Base class for failures surfaced by a property search."""

    user_message: str = GENERIC_FAILURE_MESSAGE
    retryable: bool = True


class InvalidIdentifier(SearchError):
    """Raised when the input fails identifier validation. No lookup is made."""

    user_message = INVALID_IDENTIFIER_MESSAGE
    retryable = False

    def __init__(self, raw_input: Any):
        self.raw_input = raw_input
        super().__init__(f"Invalid fastighetsbeteckning: {raw_input!r}")


class NotFound(SearchError):
    """Raised by a data source when the identifier has no registry match."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No registry match for {identifier!r}")


class UpstreamUnavailable(SearchError):
    """Raised by a data source when a registry cannot be reached or read."""

    def __init__(self, message: str, identifier: str | None = None):
        self.identifier = identifier
        super().__init__(message)


class RiskAssessmentMismatch(ValueError):
    """Raised when a stored risk assessment disagrees with its recomputation."""

    def __init__(self, stored: Any, computed: Any):
        self.stored = stored
        self.computed = computed
        super().__init__(
            f"Stored risk assessment {stored!r} does not match recomputed {computed!r}"
        )
