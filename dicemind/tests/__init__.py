"""Test tools, factories, and pytest fixtures."""
from __future__ import annotations

from dicemind.syntax import GroupTrace, RollRecord


def records(*values: int, dropped=()) -> tuple[RollRecord, ...]:
    """Build the roll records of a group from its ``values``.

    :param values: the value of each roll, in original order
    :param dropped: original indices of the rolls that are not alive
    :return: a tuple of :class:`~dicemind.syntax.RollRecord`

    This is a helper to write expected traces without having to care about
    original indices::

        expected = records(6, 1, 4, dropped=[1])
    """
    dropped = set(dropped)
    return tuple(
        RollRecord(index, value, index not in dropped, 0)
        for index, value in enumerate(values)
    )


def group_trace(sides: int, *values: int, dropped=(), value=None) -> GroupTrace:
    """Build the expected trace of a group without rerolls.

    :param sides: number of faces of the dice
    :param values: the value of each roll, in original order
    :param dropped: original indices of the rolls that are not alive
    :param value: the collapsed value of the group (optional; defaults to the
                  sum of the live rolls)
    """
    rolls = records(*values, dropped=dropped)
    if value is None:
        value = sum(roll.value for roll in rolls if roll.alive)
    return GroupTrace(sides, len(values), rolls, value)
