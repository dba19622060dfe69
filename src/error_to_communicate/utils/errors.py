"""Exception hierarchy for error reporting.

Probing operations (``parseable``, ``accept``, ``applies_to``) report
failure as booleans and never raise. The exceptions below signal
programming or configuration mistakes and abort the render in progress.
"""

from __future__ import annotations

# =============================================================================
# Custom Exceptions
# =============================================================================


class ErrorToCommunicateError(Exception):
    """Base exception for all error-to-communicate errors."""


class UnparseableExceptionError(ErrorToCommunicateError, ValueError):
    """Asked to parse an object that does not look like an exception."""


class NotAcceptedError(ErrorToCommunicateError, ValueError):
    """Asked for a heuristic on an exception the classifier rejects."""


class UnknownTagError(ErrorToCommunicateError):
    """A semantic tree used a tag outside the closed vocabulary.

    Attributes:
        tag: The offending tag.
    """

    def __init__(self, tag: object) -> None:
        super().__init__(f"Unknown semantic tag: {tag!r}")
        self.tag = tag


class ConfigurationError(ErrorToCommunicateError):
    """Heuristics or other settings are unusable as configured."""
