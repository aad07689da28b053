"""Tests dicemind's calculation tools"""
from __future__ import annotations

import pytest

from dicemind.errors import DivisionByZeroError, ValueTooLargeError
from dicemind.tools.calculation import (
    BINARY_OPS,
    COMPARISON_OPS,
    guarded_add,
    guarded_div,
    guarded_mul,
    guarded_sub,
)


def test_guarded_mul():
    assert guarded_mul(6, 7) == 42
    assert guarded_mul(2.5, 2) == 5.0
    assert guarded_mul(-3, 4) == -12


def test_guarded_mul_trivial_cases():
    huge = 2 ** 1000000
    assert guarded_mul(huge, 1) == huge
    assert guarded_mul(0, huge) == 0


def test_guarded_mul_too_large():
    huge = 10 ** 200000
    with pytest.raises(ValueTooLargeError):
        guarded_mul(huge, huge)


def test_guarded_mul_float_overflow():
    with pytest.raises(ValueTooLargeError):
        guarded_mul(0.5, 10 ** 400)

    with pytest.raises(ValueTooLargeError):
        guarded_mul(1e300, 1e300)


def test_guarded_add():
    assert guarded_add(2, 3) == 5
    assert guarded_add(0.5, 2) == 2.5
    huge = 10 ** 400
    assert guarded_add(huge, huge) == 2 * huge


@pytest.mark.parametrize('operation', [guarded_add, guarded_sub])
def test_guarded_add_sub_float_overflow(operation):
    with pytest.raises(ValueTooLargeError):
        operation(1 / 3, 10 ** 400)

    with pytest.raises(ValueTooLargeError):
        operation(10 ** 400, 0.5)


def test_guarded_sub():
    assert guarded_sub(2, 3) == -1
    assert guarded_sub(2.5, 1) == 1.5


def test_guarded_add_sub_infinite():
    with pytest.raises(ValueTooLargeError):
        guarded_add(1.7e308, 1.7e308)

    with pytest.raises(ValueTooLargeError):
        guarded_sub(1.7e308, -1.7e308)


def test_guarded_div_exact():
    result = guarded_div(6, 3)
    assert result == 2
    assert isinstance(result, int)

    result = guarded_div(-6, 3)
    assert result == -2
    assert isinstance(result, int)


def test_guarded_div_inexact():
    result = guarded_div(7, 2)
    assert result == 3.5
    assert isinstance(result, float)

    assert guarded_div(-7, 2) == -3.5


def test_guarded_div_float():
    assert guarded_div(5.0, 2) == 2.5


def test_guarded_div_by_zero():
    with pytest.raises(DivisionByZeroError):
        guarded_div(1, 0)

    with pytest.raises(DivisionByZeroError):
        guarded_div(1.5, 0.0)


def test_guarded_div_too_large():
    with pytest.raises(ValueTooLargeError):
        guarded_div(10 ** 400 + 1, 3)


def test_operator_tables():
    assert set(BINARY_OPS) == {'+', '-', '*', '/'}
    assert set(COMPARISON_OPS) == {'>', '<', '=', '>=', '<='}
    assert COMPARISON_OPS['='](2, 2) is True
    assert COMPARISON_OPS['<='](3, 2) is False
