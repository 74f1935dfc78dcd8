from __future__ import annotations

import pytest

from result_or_error import Error, ErrorKind, ResultOrError

pytestmark = pytest.mark.unit


def _never(*_args: object) -> object:
    raise AssertionError("callback must not run")


def test_chained_transforms_on_value() -> None:
    result = ResultOrError.from_value("5").then(int).then(str)

    assert result.is_error is False
    assert result.value == "5"


def test_error_short_circuits_and_keeps_errors(
    name_too_short: Error, too_young: Error
) -> None:
    source: ResultOrError[str] = ResultOrError.from_errors([name_too_short, too_young])

    result = source.then(_never).then(_never)

    assert result.is_error is True
    assert result.errors == (name_too_short, too_young)


def test_returned_container_is_flattened() -> None:
    def parse(text: str) -> ResultOrError[int]:
        return ResultOrError.from_value(int(text))

    result = ResultOrError.from_value("7").then(parse)

    assert result == ResultOrError.from_value(7)


def test_returned_error_container_becomes_the_output() -> None:
    def reject(_: int) -> ResultOrError[int]:
        return ResultOrError.from_error(Error.validation("Age", "Too young"))

    result = ResultOrError.from_value(3).then(reject).then(_never)

    assert result.is_error is True
    assert result.first_error.code == "Age"


def test_returned_error_is_wrapped_as_a_value() -> None:
    conflict = Error.conflict()
    result = ResultOrError.from_value(3).then(lambda _: conflict)

    assert result.is_error is False
    assert result.value is conflict
    assert result.value.kind is ErrorKind.CONFLICT


def test_returned_error_list_is_wrapped_as_a_value(
    name_too_short: Error, too_young: Error
) -> None:
    validation = ResultOrError.from_errors([name_too_short, too_young])

    result = ResultOrError.from_value(validation).then(lambda r: r.errors_or_empty)

    assert result.is_error is False
    assert result.value == (name_too_short, too_young)
    assert ResultOrError.from_value(1).then(lambda _: [too_young]).value == [too_young]


def test_plain_list_return_stays_a_value() -> None:
    assert ResultOrError.from_value(3).then(lambda n: [n] * n).value == [3, 3, 3]
    assert ResultOrError.from_value(3).then(lambda _: []).value == []


def test_then_do_runs_action_and_returns_original() -> None:
    seen: list[int] = []
    source = ResultOrError.from_value(4)

    result = source.then_do(seen.append)

    assert seen == [4]
    assert result is source


def test_then_do_skips_action_on_error(not_found: Error) -> None:
    source: ResultOrError[int] = ResultOrError.from_error(not_found)
    assert source.then_do(_never) is source


def test_exceptions_from_transform_propagate() -> None:
    with pytest.raises(ValueError, match="invalid literal"):
        ResultOrError.from_value("five").then(int)


def test_receiver_is_not_modified() -> None:
    source = ResultOrError.from_value(1)
    source.then(lambda n: n + 1)
    assert source.value == 1
