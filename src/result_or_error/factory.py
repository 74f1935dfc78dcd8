"""Construction helpers for ResultOrError.

Python has no implicit conversions, so the three source types each get a
named constructor, plus ``to_result_or_error`` for call sites that receive
"a value, an Error, or a list of Errors" and want the natural container.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from result_or_error.result import ResultOrError, _lift_recovery

if TYPE_CHECKING:
    from collections.abc import Iterable

    from result_or_error.error import Error

TValue = TypeVar("TValue")

__all__ = ["from_error", "from_errors", "from_value", "to_result_or_error"]


def from_value(value: TValue) -> ResultOrError[TValue]:
    """Create a successful container."""
    return ResultOrError.from_value(value)


def from_error(error: Error) -> ResultOrError[Any]:
    """Create a failed container with one error."""
    return ResultOrError.from_error(error)


def from_errors(errors: Iterable[Error]) -> ResultOrError[Any]:
    """Create a failed container; *errors* must be non-empty."""
    return ResultOrError.from_errors(errors)


def to_result_or_error(obj: Any) -> ResultOrError[Any]:
    """Convert *obj* to a container by its shape.

    - ``ResultOrError``: returned unchanged.
    - ``Error``: failed container with that error.
    - Non-empty list/tuple of only ``Error``: failed container.
    - Empty list or tuple: rejected, since it is neither a value nor errors.
    - Anything else: successful container.

    Raises:
        EmptyErrorsError: If *obj* is an empty list or tuple.
    """
    return _lift_recovery(obj)
