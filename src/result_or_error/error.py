"""Error: an immutable description of one failure."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Final, TypedDict


class ErrorDict(TypedDict):
    """Plain-dict rendering of an ``Error``."""

    kind: str
    code: str
    description: str
    metadata: dict[str, Any]


class ErrorKind(Enum):
    """Classification of an ``Error``."""

    FAILURE = "failure"
    UNEXPECTED = "unexpected"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"


_DEFAULTS: Final[dict[ErrorKind, tuple[str, str]]] = {
    ErrorKind.FAILURE: ("General.Failure", "A failure has occurred."),
    ErrorKind.UNEXPECTED: ("General.Unexpected", "An unexpected error has occurred."),
    ErrorKind.VALIDATION: ("General.Validation", "A validation error has occurred."),
    ErrorKind.CONFLICT: ("General.Conflict", "A conflict error has occurred."),
    ErrorKind.NOT_FOUND: ("General.NotFound", "A 'Not Found' error has occurred."),
    ErrorKind.UNAUTHORIZED: (
        "General.Unauthorized",
        "An 'Unauthorized' error has occurred.",
    ),
    ErrorKind.FORBIDDEN: ("General.Forbidden", "A 'Forbidden' error has occurred."),
}

_EMPTY_METADATA: Final[Mapping[str, Any]] = MappingProxyType({})


def _no_metadata() -> Mapping[str, Any]:
    return _EMPTY_METADATA


@dataclass(frozen=True, slots=True)
class Error:
    """A single failure: kind, stable code, description and optional metadata.

    Prefer the named constructors (``Error.not_found()``, ...) which fill in a
    default code and description per kind.

    Example:
        err = Error.validation("User.Name", "Name is too short")
        assert err.kind is ErrorKind.VALIDATION
    """

    kind: ErrorKind
    code: str
    description: str
    #: Read-only view; the caller's mapping is copied on construction.
    metadata: Mapping[str, Any] = field(default_factory=_no_metadata, hash=False)

    def __post_init__(self) -> None:
        """Freeze metadata so later mutation of the source dict is invisible."""
        if not isinstance(self.kind, ErrorKind):
            raise TypeError(f"kind must be an ErrorKind, got {type(self.kind).__name__}")
        if self.metadata is not _EMPTY_METADATA:
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def _of(
        cls,
        kind: ErrorKind,
        code: str | None,
        description: str | None,
        metadata: Mapping[str, Any] | None,
    ) -> Error:
        default_code, default_description = _DEFAULTS[kind]
        return cls(
            kind=kind,
            code=default_code if code is None else code,
            description=default_description if description is None else description,
            metadata=_EMPTY_METADATA if not metadata else metadata,
        )

    @classmethod
    def failure(
        cls,
        code: str | None = None,
        description: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> Error:
        """Create a general failure error."""
        return cls._of(ErrorKind.FAILURE, code, description, metadata)

    @classmethod
    def unexpected(
        cls,
        code: str | None = None,
        description: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> Error:
        """Create an internal or unclassified error."""
        return cls._of(ErrorKind.UNEXPECTED, code, description, metadata)

    @classmethod
    def validation(
        cls,
        code: str | None = None,
        description: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> Error:
        """Create an error for input that failed a correctness rule."""
        return cls._of(ErrorKind.VALIDATION, code, description, metadata)

    @classmethod
    def conflict(
        cls,
        code: str | None = None,
        description: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> Error:
        """Create a state-conflict error (e.g. a duplicate)."""
        return cls._of(ErrorKind.CONFLICT, code, description, metadata)

    @classmethod
    def not_found(
        cls,
        code: str | None = None,
        description: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> Error:
        """Create an error for a referenced entity that does not exist."""
        return cls._of(ErrorKind.NOT_FOUND, code, description, metadata)

    @classmethod
    def unauthorized(
        cls,
        code: str | None = None,
        description: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> Error:
        """Create an error for a caller that is not authenticated."""
        return cls._of(ErrorKind.UNAUTHORIZED, code, description, metadata)

    @classmethod
    def forbidden(
        cls,
        code: str | None = None,
        description: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> Error:
        """Create an error for a caller that lacks permission."""
        return cls._of(ErrorKind.FORBIDDEN, code, description, metadata)

    def to_dict(self) -> ErrorDict:
        """Return a plain-dict rendering (kind as its string value)."""
        return {
            "kind": self.kind.value,
            "code": self.code,
            "description": self.description,
            "metadata": dict(self.metadata),
        }

    def __str__(self) -> str:
        return f"{self.kind.name}: {self.code}: {self.description}"


NO_ERRORS: Final[Error] = Error.unexpected(
    code="ResultOrError.NoErrors",
    description="Error list cannot be retrieved from a successful ResultOrError.",
)

NO_FIRST_ERROR: Final[Error] = Error.unexpected(
    code="ResultOrError.NoFirstError",
    description="First error cannot be retrieved from a successful ResultOrError.",
)
