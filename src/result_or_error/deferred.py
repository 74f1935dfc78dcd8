"""DeferredResult: combinators on a ResultOrError that has not resolved yet.

Wrap any awaitable producing a ``ResultOrError`` and keep chaining as if it had
already resolved; nothing runs until the chain is awaited.

Example:
    async def load_user(user_id: int) -> ResultOrError[User]: ...

    name = await (
        deferred(load_user(7))
        .then(lambda user: user.name)
        .else_(lambda errors: "anonymous")
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from result_or_error.result import ResultOrError, _lift_recovery

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Generator

    from result_or_error.error import Error


TValue = TypeVar("TValue")
TNext = TypeVar("TNext")
R = TypeVar("R")


class DeferredResult(Generic[TValue]):
    """An in-flight ``ResultOrError`` with the same combinator surface.

    Every combinator resolves the upstream first and then delegates to the
    resolved container's ``*_async`` method, so routing is identical to the
    synchronous form. Callables may be sync or async.

    Like the coroutine it usually wraps, a DeferredResult is awaited once.
    Chained steps build their coroutines only when awaited, so a chain that
    is dropped unawaited leaves nothing behind.
    """

    __slots__ = ("_factory",)

    def __init__(self, source: Awaitable[ResultOrError[TValue]]) -> None:
        self._factory: Callable[[], Awaitable[Any]] = lambda: source

    @classmethod
    def _lazy(cls, factory: Callable[[], Awaitable[Any]]) -> DeferredResult[Any]:
        instance = cls.__new__(cls)
        instance._factory = factory
        return instance

    def __await__(self) -> Generator[Any, None, ResultOrError[TValue]]:
        return self._resolve().__await__()

    def __repr__(self) -> str:
        return f"DeferredResult({self._factory!r})"

    async def _resolve(self) -> ResultOrError[TValue]:
        return _lift_recovery(await self._factory())

    async def _apply(self, method: str, *args: Any) -> Any:
        resolved = await self._resolve()
        return await getattr(resolved, method)(*args)

    def then(self, on_value: Callable[[TValue], Any]) -> DeferredResult[TNext]:
        """Deferred ``then``; *on_value* may return an awaitable."""
        return DeferredResult._lazy(lambda: self._apply("then_async", on_value))

    def then_do(self, action: Callable[[TValue], Any]) -> DeferredResult[TValue]:
        """Deferred ``then_do``; *action* may return an awaitable."""
        return DeferredResult._lazy(lambda: self._apply("then_do_async", action))

    def else_(self, on_error: Any) -> DeferredResult[TValue]:
        """Deferred ``else_``; accepts callables, literals and awaitable literals."""
        return DeferredResult._lazy(lambda: self._apply("else_async", on_error))

    async def match(
        self,
        on_value: Callable[[TValue], Awaitable[R] | R],
        on_errors: Callable[[tuple[Error, ...]], Awaitable[R] | R],
    ) -> R:
        """Resolve, then fold with ``match``."""
        return await self._apply("match_async", on_value, on_errors)

    async def match_first(
        self,
        on_value: Callable[[TValue], Awaitable[R] | R],
        on_first_error: Callable[[Error], Awaitable[R] | R],
    ) -> R:
        """Resolve, then fold with ``match_first``."""
        return await self._apply("match_first_async", on_value, on_first_error)

    async def switch(
        self,
        on_value: Callable[[TValue], Any],
        on_errors: Callable[[tuple[Error, ...]], Any],
    ) -> None:
        """Resolve, then run one action with ``switch``."""
        await self._apply("switch_async", on_value, on_errors)

    async def switch_first(
        self,
        on_value: Callable[[TValue], Any],
        on_first_error: Callable[[Error], Any],
    ) -> None:
        """Resolve, then run one action with ``switch_first``."""
        await self._apply("switch_first_async", on_value, on_first_error)


async def _ready(result: ResultOrError[TValue]) -> ResultOrError[TValue]:
    return result


def deferred(
    source: Awaitable[ResultOrError[TValue]] | ResultOrError[TValue],
) -> DeferredResult[TValue]:
    """Wrap an awaitable (or an already-resolved container) for deferred chaining.

    An awaitable that resolves to something other than a container is lifted
    like an ``else_`` outcome: an ``Error`` or non-empty error list fails, an
    empty list or tuple raises ``EmptyErrorsError``, anything else succeeds.
    """
    if isinstance(source, ResultOrError):
        return DeferredResult._lazy(lambda: _ready(source))
    return DeferredResult(source)
