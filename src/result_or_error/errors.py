"""Exception hierarchy for result-or-error.

Expected failures travel inside ``ResultOrError`` as data. The exceptions here
are reserved for contract violations: programming errors at a construction or
configuration boundary.
"""

from __future__ import annotations

from typing import Any


class ResultOrErrorException(Exception):
    """Base exception for all result-or-error contract violations."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class EmptyErrorsError(ResultOrErrorException, ValueError):
    """An error state was requested with no errors to hold."""


class InvariantViolationError(ResultOrErrorException, TypeError, ValueError):
    """A container was built in a state its invariants forbid.

    Raised for direct construction with both a value and errors, or with
    error items that are not ``Error`` instances.
    """


class ConfigurationError(ResultOrErrorException):
    """Configuration validation or resolution failed."""


class EnvelopeError(ResultOrErrorException):
    """An envelope payload could not be turned back into a container.

    ``details`` holds the structured validation errors, when available.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.details = details or []
