"""Tests for the Result type used to capture accessor invocations."""

import pytest

from assertify.result import Err, Ok, try_result


def test_ok():
    result = Ok(5)

    assert result.is_ok() and not result.is_err()
    assert result.unwrap() == 5
    assert result.unwrap_or(0) == 5
    assert result.error is None


def test_err():
    error = KeyError("missing")
    result = Err(error)

    assert result.is_err() and not result.is_ok()
    assert result.unwrap_or(None) is None
    assert result.value is None
    with pytest.raises(ValueError, match="Called unwrap on Err"):
        result.unwrap()


def test_try_result_captures_exception():
    result = try_result(lambda: int("nope"))

    assert result.is_err()
    assert isinstance(result.error, ValueError)


def test_try_result_success():
    assert try_result(lambda: 7) == Ok(7)


def test_try_result_lets_other_types_propagate():
    def interrupted():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        try_result(interrupted)

    with pytest.raises(ZeroDivisionError):
        try_result(lambda: 1 / 0, error_types=KeyError)
