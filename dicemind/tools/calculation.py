"""Tools to help safely do calculations from user input"""
from __future__ import annotations

import math
import numbers
import operator

from dicemind.errors import DivisionByZeroError, ValueTooLargeError


__all__ = [
    'BINARY_OPS',
    'COMPARISON_OPS',
    'guarded_add',
    'guarded_div',
    'guarded_mul',
    'guarded_sub',
]


def _checked(operation, left, right):
    # mixing a float with an int beyond the float range overflows, and
    # floats alone saturate to infinity
    try:
        result = operation(left, right)
    except OverflowError:
        raise ValueTooLargeError()

    if isinstance(result, float) and math.isinf(result):
        raise ValueTooLargeError()

    return result


def guarded_mul(left, right):
    """Multiply two values, guarding against overly large inputs.

    :param left: the left operand
    :type left: int or float
    :param right: the right operand
    :type right: int or float
    :raise ValueTooLargeError: if the inputs are too large to handle safely,
                             or if the product does not fit in a float
    """
    # Only handle ints because floats will overflow anyway.
    if not isinstance(left, numbers.Integral):
        pass
    elif not isinstance(right, numbers.Integral):
        pass
    elif left in (0, 1) or right in (0, 1):
        # Ignore trivial cases.
        pass
    elif left.bit_length() + right.bit_length() > 664386:
        # 664386 is the number of bits (10**100000)**2 has, which is instant
        # on a laptop, while (10**1000000)**2 has a noticeable delay.
        raise ValueTooLargeError()

    return _checked(operator.mul, left, right)


def guarded_add(left, right):
    """Add two values.

    :raise ValueTooLargeError: if a float operand makes the sum
                               overflow
    """
    return _checked(operator.add, left, right)


def guarded_sub(left, right):
    """Subtract two values.

    :raise ValueTooLargeError: if a float operand makes the
                               difference overflow
    """
    return _checked(operator.sub, left, right)


def guarded_div(left, right):
    """Divide two values.

    :param left: the dividend
    :type left: int or float
    :param right: the divisor
    :type right: int or float
    :return: an :class:`int` when two integers divide exactly, a
             :class:`float` otherwise
    :raise DivisionByZeroError: if ``right`` is zero
    :raise ValueTooLargeError: if the quotient does not fit in a float
    """
    if right == 0:
        raise DivisionByZeroError()

    if (isinstance(left, numbers.Integral)
            and isinstance(right, numbers.Integral)
            and left % right == 0):
        return left // right

    return _checked(operator.truediv, left, right)


BINARY_OPS = {
    '+': guarded_add,
    '-': guarded_sub,
    '*': guarded_mul,
    '/': guarded_div,
}
"""Arithmetic operators, by their symbol."""

COMPARISON_OPS = {
    '>': operator.gt,
    '<': operator.lt,
    '=': operator.eq,
    '>=': operator.ge,
    '<=': operator.le,
}
"""Comparison operators, by their symbol."""
