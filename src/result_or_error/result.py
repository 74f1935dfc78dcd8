"""ResultOrError: a discriminated union of one value or a non-empty error list.

Expected failures are data here, not exceptions. A container is built once in
one of two states and never changes; every combinator returns a container (or
a folded value) without touching the receiver.

Each combinator has an ``*_async`` twin. The twins accept callables returning
either plain outcomes or awaitables, await where needed, and then apply the
same routing and lifting as the synchronous form.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from result_or_error.config import current_config
from result_or_error.error import NO_ERRORS, NO_FIRST_ERROR, Error
from result_or_error.errors import EmptyErrorsError, InvariantViolationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

TValue = TypeVar("TValue")
TNext = TypeVar("TNext")
R = TypeVar("R")

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True, repr=False, match_args=False)
class ResultOrError(Generic[TValue]):
    """Either a value or a non-empty, ordered tuple of ``Error``.

    Build instances with ``from_value``, ``from_error`` or ``from_errors``.
    Accessors never raise: reading errors from a success yields a sentinel
    Unexpected error, and reading the value from a failure yields ``None``.

    Example:
        result = ResultOrError.from_value("5").then(int).then(str)
        assert result.value == "5"
    """

    _value: TValue | None = None
    _errors: tuple[Error, ...] = ()

    def __post_init__(self) -> None:
        """Enforce that the error tuple only holds Errors and excludes a value."""
        if not isinstance(self._errors, tuple):
            raise InvariantViolationError(
                "errors must be stored as a tuple",
                hint="Build failed containers with from_error() or from_errors().",
            )
        for item in self._errors:
            if not isinstance(item, Error):
                raise InvariantViolationError(
                    f"expected Error, got {type(item).__name__}",
                    hint="Wrap failures with Error.<kind>(...) before storing them.",
                )
        if self._errors and self._value is not None:
            raise InvariantViolationError(
                "a ResultOrError cannot hold both a value and errors",
                hint="Use from_value() or from_errors(), not both.",
            )

    # --- Construction ---

    @classmethod
    def from_value(cls, value: TValue) -> ResultOrError[TValue]:
        """Create a successful container holding *value*."""
        return cls(_value=value)

    @classmethod
    def from_error(cls, error: Error) -> ResultOrError[TValue]:
        """Create a failed container holding a single *error*."""
        if not isinstance(error, Error):
            raise InvariantViolationError(
                f"expected Error, got {type(error).__name__}",
                hint="Use from_value() for non-error outcomes.",
            )
        return cls(_errors=(error,))

    @classmethod
    def from_errors(cls, errors: Iterable[Error]) -> ResultOrError[TValue]:
        """Create a failed container from a non-empty sequence of errors.

        Raises:
            EmptyErrorsError: If *errors* is empty.
            InvariantViolationError: If any item is not an ``Error``.
        """
        captured = tuple(errors)
        if not captured:
            raise EmptyErrorsError(
                "Cannot create a ResultOrError from an empty error sequence",
                hint="Use from_value() for success or pass at least one Error.",
            )
        return cls(_errors=captured)

    # --- Accessors ---

    @property
    def is_error(self) -> bool:
        """True when the container holds errors."""
        return bool(self._errors)

    @property
    def value(self) -> TValue | None:
        """The held value, or ``None`` when the container holds errors."""
        return self._value

    def value_or(self, default: TValue) -> TValue:
        """Return the held value, or *default* when the container holds errors."""
        if self._errors:
            return default
        return cast("TValue", self._value)

    @property
    def errors(self) -> tuple[Error, ...]:
        """The errors, or a single ``NO_ERRORS`` sentinel on success."""
        if self._errors:
            return self._errors
        _report_misuse("errors")
        return (NO_ERRORS,)

    @property
    def errors_or_empty(self) -> tuple[Error, ...]:
        """The errors, or an empty tuple on success."""
        return self._errors

    @property
    def first_error(self) -> Error:
        """The first error, or the ``NO_FIRST_ERROR`` sentinel on success."""
        if self._errors:
            return self._errors[0]
        _report_misuse("first_error")
        return NO_FIRST_ERROR

    def __repr__(self) -> str:
        if self._errors:
            return f"ResultOrError(errors={list(self._errors)!r})"
        return f"ResultOrError(value={self._value!r})"

    # --- Then: bind on success ---

    def then(
        self, on_value: Callable[[TValue], ResultOrError[TNext] | TNext]
    ) -> ResultOrError[TNext]:
        """Apply *on_value* to the value; errors short-circuit untouched.

        A returned ``ResultOrError`` is used as-is (no double wrapping); any
        other return value, an ``Error`` included, becomes a successful one.
        Fail from *on_value* by returning ``ResultOrError.from_error(...)``.
        """
        if self._route("then"):
            return cast("ResultOrError[TNext]", self)
        return _lift_value(on_value(cast("TValue", self._value)))

    async def then_async(
        self,
        on_value: Callable[
            [TValue],
            Awaitable[ResultOrError[TNext] | TNext] | ResultOrError[TNext] | TNext,
        ],
    ) -> ResultOrError[TNext]:
        """Awaiting form of ``then``."""
        if self._route("then_async"):
            return cast("ResultOrError[TNext]", self)
        return _lift_value(await _resolve(on_value(cast("TValue", self._value))))

    def then_do(self, action: Callable[[TValue], Any]) -> ResultOrError[TValue]:
        """Run *action* for its side effect on success; return this container."""
        if not self._route("then_do"):
            action(cast("TValue", self._value))
        return self

    async def then_do_async(
        self, action: Callable[[TValue], Awaitable[Any] | Any]
    ) -> ResultOrError[TValue]:
        """Awaiting form of ``then_do``."""
        if not self._route("then_do_async"):
            await _resolve(action(cast("TValue", self._value)))
        return self

    # --- Else: recover on failure ---

    def else_(
        self,
        on_error: Callable[[tuple[Error, ...]], TValue | Error | Iterable[Error]]
        | TValue
        | Error
        | Iterable[Error],
    ) -> ResultOrError[TValue]:
        """Recover from errors; a successful container passes through untouched.

        *on_error* is either a callable receiving the full error tuple, or a
        literal replacement. A container is used as-is, an ``Error`` or
        non-empty list of errors stays failed, and anything else recovers.

        Raises:
            EmptyErrorsError: If the outcome is an empty list or tuple.
        """
        if not self._route("else_"):
            return self
        outcome = on_error(self._errors) if callable(on_error) else on_error
        return _lift_recovery(outcome)

    async def else_async(self, on_error: Any) -> ResultOrError[TValue]:
        """Awaiting form of ``else_``.

        Also accepts an awaitable literal, which is awaited only on failure.
        An unused coroutine literal is closed.
        """
        if not self._route("else_async"):
            _discard(on_error)
            return self
        outcome = on_error(self._errors) if callable(on_error) else on_error
        return _lift_recovery(await _resolve(outcome))

    # --- Match: fold to a new type ---

    def match(
        self,
        on_value: Callable[[TValue], R],
        on_errors: Callable[[tuple[Error, ...]], R],
    ) -> R:
        """Return ``on_errors(errors)`` or ``on_value(value)``."""
        if self._route("match"):
            return on_errors(self._errors)
        return on_value(cast("TValue", self._value))

    async def match_async(
        self,
        on_value: Callable[[TValue], Awaitable[R] | R],
        on_errors: Callable[[tuple[Error, ...]], Awaitable[R] | R],
    ) -> R:
        """Awaiting form of ``match``."""
        if self._route("match_async"):
            return await _resolve(on_errors(self._errors))
        return await _resolve(on_value(cast("TValue", self._value)))

    def match_first(
        self,
        on_value: Callable[[TValue], R],
        on_first_error: Callable[[Error], R],
    ) -> R:
        """Like ``match``, but the error branch receives only the first error."""
        if self._route("match_first"):
            return on_first_error(self._errors[0])
        return on_value(cast("TValue", self._value))

    async def match_first_async(
        self,
        on_value: Callable[[TValue], Awaitable[R] | R],
        on_first_error: Callable[[Error], Awaitable[R] | R],
    ) -> R:
        """Awaiting form of ``match_first``."""
        if self._route("match_first_async"):
            return await _resolve(on_first_error(self._errors[0]))
        return await _resolve(on_value(cast("TValue", self._value)))

    # --- Switch: fold for side effects ---

    def switch(
        self,
        on_value: Callable[[TValue], Any],
        on_errors: Callable[[tuple[Error, ...]], Any],
    ) -> None:
        """Run exactly one of the two actions; return nothing."""
        self.match(on_value, on_errors)

    async def switch_async(
        self,
        on_value: Callable[[TValue], Awaitable[Any] | Any],
        on_errors: Callable[[tuple[Error, ...]], Awaitable[Any] | Any],
    ) -> None:
        """Awaiting form of ``switch``."""
        await self.match_async(on_value, on_errors)

    def switch_first(
        self,
        on_value: Callable[[TValue], Any],
        on_first_error: Callable[[Error], Any],
    ) -> None:
        """Like ``switch``, but the error action receives only the first error."""
        self.match_first(on_value, on_first_error)

    async def switch_first_async(
        self,
        on_value: Callable[[TValue], Awaitable[Any] | Any],
        on_first_error: Callable[[Error], Awaitable[Any] | Any],
    ) -> None:
        """Awaiting form of ``switch_first``."""
        await self.match_first_async(on_value, on_first_error)

    # --- Internals ---

    def _route(self, op: str) -> bool:
        """Return ``is_error`` and trace the branch taken."""
        is_error = bool(self._errors)
        if current_config().trace:
            logger.debug(
                "%s: %s branch (%d error(s))",
                op,
                "error" if is_error else "value",
                len(self._errors),
            )
        return is_error


def _is_error_sequence(obj: object) -> bool:
    """True for a non-empty list or tuple made only of ``Error`` instances."""
    return (
        isinstance(obj, (list, tuple))
        and len(obj) > 0
        and all(isinstance(item, Error) for item in obj)
    )


def _lift_value(outcome: Any) -> ResultOrError[Any]:
    if isinstance(outcome, ResultOrError):
        return outcome
    return ResultOrError.from_value(outcome)


def _lift_recovery(outcome: Any) -> ResultOrError[Any]:
    """Lift an error-side outcome; empty sequences are rejected, not recovered."""
    if isinstance(outcome, ResultOrError):
        return outcome
    if isinstance(outcome, Error):
        return ResultOrError.from_error(outcome)
    if isinstance(outcome, (list, tuple)) and not outcome:
        raise EmptyErrorsError(
            "Cannot recover to an empty error sequence",
            hint="Return a value to recover or at least one Error to stay failed.",
        )
    if _is_error_sequence(outcome):
        return ResultOrError.from_errors(outcome)
    return ResultOrError.from_value(outcome)


async def _resolve(outcome: Any) -> Any:
    if inspect.isawaitable(outcome):
        return await outcome
    return outcome


def _discard(outcome: Any) -> None:
    # Short-circuited coroutine literals would otherwise warn "never awaited".
    if inspect.iscoroutine(outcome):
        outcome.close()


def _report_misuse(accessor: str) -> None:
    if current_config().warn_on_misuse:
        logger.warning(
            "Read %s from a successful ResultOrError; returning a sentinel error",
            accessor,
        )
