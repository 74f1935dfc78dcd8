"""Chaining on an in-flight ResultOrError via ``deferred``."""

from __future__ import annotations

import asyncio
import gc
from typing import Any
import warnings

import pytest

from result_or_error import (
    DeferredResult,
    EmptyErrorsError,
    Error,
    ErrorKind,
    ResultOrError,
    deferred,
)

pytestmark = pytest.mark.unit


def _never(*_args: object) -> Any:
    raise AssertionError("callback must not run")


async def _fetch(result: ResultOrError[Any]) -> ResultOrError[Any]:
    await asyncio.sleep(0)
    return result


@pytest.mark.asyncio
async def test_awaiting_yields_the_resolved_container() -> None:
    result = await deferred(_fetch(ResultOrError.from_value(1)))
    assert result == ResultOrError.from_value(1)


@pytest.mark.asyncio
async def test_wrapping_a_resolved_container() -> None:
    wrapped = deferred(ResultOrError.from_value("5"))

    assert isinstance(wrapped, DeferredResult)
    assert (await wrapped.then(int)).value == 5


@pytest.mark.asyncio
async def test_chain_with_sync_and_async_callables() -> None:
    async def double(n: int) -> int:
        await asyncio.sleep(0)
        return n * 2

    result = await (
        deferred(_fetch(ResultOrError.from_value("5"))).then(int).then(double).then(str)
    )

    assert result.value == "10"


@pytest.mark.asyncio
async def test_error_short_circuits_then_and_recovers(not_found: Error) -> None:
    result = await (
        deferred(_fetch(ResultOrError.from_error(not_found)))
        .then(_never)
        .then(_never)
        .else_(lambda errors: f"count:{len(errors)}")
    )

    assert result.value == "count:1"


@pytest.mark.asyncio
async def test_else_with_literal_error(not_found: Error) -> None:
    result = await deferred(_fetch(ResultOrError.from_error(not_found))).else_(
        Error.unexpected()
    )
    assert result.first_error.kind is ErrorKind.UNEXPECTED


@pytest.mark.asyncio
async def test_then_do_keeps_the_value() -> None:
    seen: list[int] = []
    result = await deferred(_fetch(ResultOrError.from_value(3))).then_do(seen.append)

    assert seen == [3]
    assert result.value == 3


@pytest.mark.asyncio
async def test_folds_resolve_then_apply(name_too_short: Error, too_young: Error) -> None:
    failed = ResultOrError.from_errors([name_too_short, too_young])

    assert await deferred(_fetch(failed)).match(_never, len) == 2
    assert (
        await deferred(_fetch(failed)).match_first(_never, lambda e: e.code)
        == "User.Name"
    )

    seen: list[Any] = []
    await deferred(_fetch(failed)).switch(_never, seen.append)
    await deferred(_fetch(failed)).switch_first(_never, seen.append)
    await deferred(_fetch(ResultOrError.from_value(1))).switch(seen.append, _never)

    assert seen == [(name_too_short, too_young), name_too_short, 1]


@pytest.mark.asyncio
async def test_upstream_bare_value_is_lifted() -> None:
    async def produce() -> int:
        return 4

    result = await deferred(produce())  # type: ignore[arg-type]
    assert result == ResultOrError.from_value(4)


@pytest.mark.asyncio
async def test_nothing_runs_until_awaited() -> None:
    calls: list[str] = []

    async def produce() -> ResultOrError[int]:
        calls.append("produce")
        return ResultOrError.from_value(1)

    chain = deferred(produce()).then(lambda n: calls.append("then") or n)
    assert calls == []

    await chain
    assert calls == ["produce", "then"]


@pytest.mark.asyncio
async def test_exceptions_from_upstream_propagate() -> None:
    async def broken() -> ResultOrError[int]:
        raise RuntimeError("connection reset")

    with pytest.raises(RuntimeError, match="connection reset"):
        await deferred(broken()).then(_never)


@pytest.mark.asyncio
async def test_cancellation_propagates() -> None:
    started = asyncio.Event()

    async def slow() -> ResultOrError[int]:
        started.set()
        await asyncio.sleep(10)
        return ResultOrError.from_value(1)

    async def run_chain() -> ResultOrError[int]:
        return await deferred(slow()).then(_never)

    task = asyncio.ensure_future(run_chain())
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_independent_chains_run_concurrently(not_found: Error) -> None:
    ok = deferred(_fetch(ResultOrError.from_value("2"))).then(int)
    failed = deferred(_fetch(ResultOrError.from_error(not_found))).then(int)

    r1, r2 = await asyncio.gather(ok, failed)

    assert r1.value == 2
    assert r2.errors == (not_found,)


def test_unawaited_chain_leaves_no_pending_coroutines() -> None:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        chain = deferred(ResultOrError.from_value(1)).then(str).then_do(print).else_(0)
        del chain
        gc.collect()

    assert not [w for w in caught if issubclass(w.category, RuntimeWarning)]


@pytest.mark.asyncio
async def test_each_chained_step_starts_only_when_awaited() -> None:
    calls: list[int] = []
    base = deferred(ResultOrError.from_value(1))

    first = base.then(lambda n: calls.append(n) or n)
    second = base.then(lambda n: calls.append(n + 1) or n)
    assert calls == []

    assert (await second).value == 1
    assert (await first).value == 1
    assert calls == [2, 1]


@pytest.mark.asyncio
async def test_upstream_empty_list_is_rejected() -> None:
    async def produce() -> list[Error]:
        return []

    with pytest.raises(EmptyErrorsError):
        await deferred(produce())  # type: ignore[arg-type]
