"""Text formatting of expressions, roll traces and errors.

These helpers produce plain text only; they are used by the command line
front-end to show what was rolled, in a notation close to the input::

    2d20kh + 3: (14[+9]) + 3 = 17
"""
from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, Iterator

from dicemind.errors import DiceError
from dicemind.syntax import (
    BinaryOp,
    Comparison,
    DiceGroup,
    Expression,
    Filter,
    GroupTrace,
    Negation,
    Number,
    RawAugmentation,
    Relation,
    Reroll,
    Tally,
    Truncation,
)


MAX_SIMPLE_DICE = 10
"""Groups with more dice than this use the compressed notation."""
MAX_COMPRESSED_FACES = 10
"""Groups with more distinct faces than this are elided as ``(...)``."""

_PRECEDENCE = {
    Comparison: 1,
    BinaryOp: 2,
    Negation: 4,
}
_MULTIPLICATIVE = ('*', '/')


def format_augmentation(augmentation) -> str:
    """Write a raw or resolved augmentation back in dice notation."""
    if isinstance(augmentation, RawAugmentation):
        text = (augmentation.prefix or '') + augmentation.letter
        text += augmentation.qualifier or ''
        if augmentation.argument is not None:
            text += str(augmentation.argument)
        if augmentation.limit is not None:
            text += 'x%d' % augmentation.limit
        return text

    if isinstance(augmentation, Filter):
        predicate = augmentation.predicate
        qualifier = '' if predicate.relation is Relation.EQUALS else predicate.relation.value
        return '%s%s%d' % (augmentation.mode.value, qualifier, predicate.value)

    if isinstance(augmentation, Truncation):
        return '%s%s%d' % (
            augmentation.mode.value, augmentation.extreme.value, augmentation.count)

    if isinstance(augmentation, Tally):
        return 'n%d' % augmentation.value

    if isinstance(augmentation, Reroll):
        predicate = augmentation.predicate
        qualifier = '' if predicate.relation is Relation.EQUALS else predicate.relation.value
        return 'r%s%dx%d' % (qualifier, predicate.value, augmentation.max_times)

    raise TypeError('Not an augmentation: %r' % (augmentation,))


def _precedence(node: Expression) -> int:
    if isinstance(node, BinaryOp) and node.op in _MULTIPLICATIVE:
        return 3
    return _PRECEDENCE.get(type(node), 5)


def format_expression(
    expression: Expression,
    format_dice: Callable[[DiceGroup], str] | None = None,
) -> str:
    """Write an expression tree back in dice notation.

    :param expression: the tree to format
    :param format_dice: how to write each dice group (optional; defaults to
                        its notation, such as ``4d6dl1``)

    Parentheses are only added where precedence requires them. Dice groups
    are formatted left to right, in evaluation order.
    """
    if isinstance(expression, Number):
        return str(expression.value)

    if isinstance(expression, DiceGroup):
        if format_dice is not None:
            return format_dice(expression)
        count = '' if expression.count == 1 else str(expression.count)
        augmentations = ''.join(
            format_augmentation(augmentation)
            for augmentation in expression.augmentations)
        return '%sd%s%s' % (count, expression.sides, augmentations)

    level = _precedence(expression)

    if isinstance(expression, Negation):
        operand = format_expression(expression.operand, format_dice)
        if _precedence(expression.operand) <= level:
            operand = '(%s)' % operand
        return '-' + operand

    if isinstance(expression, (BinaryOp, Comparison)):
        left = format_expression(expression.left, format_dice)
        right = format_expression(expression.right, format_dice)
        left_level = _precedence(expression.left)
        # comparisons don't chain
        if left_level < level or (isinstance(expression, Comparison)
                                  and left_level == level):
            left = '(%s)' % left
        if _precedence(expression.right) <= level:
            right = '(%s)' % right
        return '%s %s %s' % (left, expression.op, right)

    raise TypeError('Not an expression node: %r' % (expression,))


def get_simple_string(trace: GroupTrace) -> str:
    """Return the values of the dice like (2+2+2[+1+1])."""
    alive = [str(roll.value) for roll in trace.rolls if roll.alive]
    dropped = [str(roll.value) for roll in trace.rolls if not roll.alive]

    dropped_str = ''
    if dropped:
        dropped_str = '[+%s]' % '+'.join(dropped)

    return '(%s%s)' % ('+'.join(alive), dropped_str)


def get_compressed_string(trace: GroupTrace) -> str:
    """Return the values of the dice like (3x2[+2x1])."""
    alive = Counter(roll.value for roll in trace.rolls if roll.alive)
    dropped = Counter(roll.value for roll in trace.rolls if not roll.alive)

    dice_str = '+'.join('%dx%d' % (times, face) for face, times in alive.items())

    dropped_str = ''
    if dropped:
        dfaces = ('%dx%d' % (times, face) for face, times in dropped.items())
        dropped_str = '[+%s]' % '+'.join(dfaces)

    return '(%s%s)' % (dice_str, dropped_str)


def get_number_of_faces(trace: GroupTrace) -> int:
    """Count distinct faces among live dice, plus among dropped dice."""
    alive = {roll.value for roll in trace.rolls if roll.alive}
    dropped = {roll.value for roll in trace.rolls if not roll.alive}
    return len(alive) + len(dropped)


def format_group(trace: GroupTrace) -> str:
    """Format a group's rolls as compactly as its size requires."""
    if trace.count <= MAX_SIMPLE_DICE:
        return get_simple_string(trace)
    elif get_number_of_faces(trace) <= MAX_COMPRESSED_FACES:
        return get_compressed_string(trace)
    else:
        return '(...)'


def format_rolls(expression: Expression, traces: Iterable[GroupTrace]) -> str:
    """Write ``expression`` with every dice group replaced by its rolls.

    :param expression: the evaluated expression
    :param traces: the evaluation trace, one entry per dice group in
                   evaluation order
    """
    pending: Iterator[GroupTrace] = iter(traces)

    def _format_dice(group: DiceGroup) -> str:
        trace = next(pending, None)
        if trace is None:
            return format_expression(group)
        return format_group(trace)

    return format_expression(expression, _format_dice)


def format_error(source: str, error: DiceError) -> str:
    """Describe ``error``, pointing at its position in ``source`` if known."""
    message = str(error)
    position = error.position
    if position is None:
        return message
    return '{}\n{}^\n{}'.format(source, ' ' * position, message)
