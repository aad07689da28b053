"""Static simplification of expression trees.

Simplifying never rolls dice. It folds what is known before rolling, which
is handy to show a normalized expression or to skip work for constant
parts::

    >>> from dicemind import parse
    >>> from dicemind.simplify import simplify
    >>> simplify(parse('3d1 + 2 * 4'))
    Number(value=11)

.. note::

    A simplified tree may consume fewer random draws than the original one,
    since ``Nd1`` groups become constants.
"""
from __future__ import annotations

import enum

from dicemind.errors import EvalError
from dicemind.options import EvaluationOptions
from dicemind.syntax import (
    BinaryOp,
    Comparison,
    DiceGroup,
    Expression,
    Negation,
    Number,
)
from dicemind.tools import calculation


class Steps(enum.Flag):
    """Simplification steps; combine them with ``|``."""
    INLINE_PERCENTILE = enum.auto()
    """Replace ``d%`` with the configured number of sides: ``d%`` => ``d100``."""
    REPLACE_CONSTANT_VALUED_DICE = enum.auto()
    """Unaugmented one-sided dice are constants: ``8d1`` => ``8``."""
    COLLAPSE_CONSTANTS = enum.auto()
    """Fold operations on constants: ``2 + 4`` => ``6``."""
    ALL = INLINE_PERCENTILE | REPLACE_CONSTANT_VALUED_DICE | COLLAPSE_CONSTANTS


def simplify(
    expression: Expression,
    options: EvaluationOptions | None = None,
    steps: Steps = Steps.ALL,
) -> Expression:
    """Return a simplified copy of ``expression``.

    :param expression: the expression tree to simplify
    :param options: evaluation options, used for the percentile size and the
                    dice limit (optional)
    :param steps: which simplifications to perform (optional; all of them by
                  default)

    Operations that would fail at evaluation time (a division by zero, a
    value too large) are left as they are, so that evaluating the simplified
    tree reports the same error.
    """
    options = options or EvaluationOptions()

    if isinstance(expression, DiceGroup):
        return _simplify_dice(expression, options, steps)

    if isinstance(expression, Negation):
        operand = simplify(expression.operand, options, steps)
        if Steps.COLLAPSE_CONSTANTS in steps and isinstance(operand, Number):
            return Number(-operand.value)
        return Negation(operand)

    if isinstance(expression, (BinaryOp, Comparison)):
        left = simplify(expression.left, options, steps)
        right = simplify(expression.right, options, steps)
        folded = expression._replace(left=left, right=right)

        if (Steps.COLLAPSE_CONSTANTS in steps
                and isinstance(left, Number)
                and isinstance(right, Number)):
            try:
                if isinstance(expression, Comparison):
                    compare = calculation.COMPARISON_OPS[expression.op]
                    return Number(int(compare(left.value, right.value)))
                operation = calculation.BINARY_OPS[expression.op]
                return Number(operation(left.value, right.value))
            except EvalError:
                return folded

        return folded

    return expression


def _simplify_dice(
    group: DiceGroup,
    options: EvaluationOptions,
    steps: Steps,
) -> Expression:
    if Steps.INLINE_PERCENTILE in steps and group.is_percentile:
        group = group._replace(sides=options.percentile_sides)

    if (Steps.REPLACE_CONSTANT_VALUED_DICE in steps
            and group.sides == 1
            and not group.augmentations
            and 0 < group.count <= options.max_dice):
        return Number(group.count)

    return group
