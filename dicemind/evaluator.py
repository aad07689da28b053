"""
evaluator.py - Dice expression evaluator
Copyright 2026, dicemind contributors
Licensed under the Eiffel Forum License 2.

The :class:`Evaluator` walks an expression tree post-order, left operand
before right. Each dice group is rolled into a
:class:`~dicemind.roller.DicePouch`, its augmentations are applied in source
order, and the pouch is collapsed to a single value.

Given the same expression, options and sequence of random draws, evaluation
always produces the same result and the same trace.
"""
from __future__ import annotations

import logging

from dicemind.augmentation import is_resolved, resolve, resolve_expression
from dicemind.errors import (
    InvalidDiceCountError,
    InvalidDiceSizeError,
    ResolveError,
    TooManyDiceError,
)
from dicemind.options import EvaluationOptions
from dicemind.parser import parse
from dicemind.roller import DicePouch, RandomSource, seeded
from dicemind.syntax import (
    BinaryOp,
    Comparison,
    DiceGroup,
    EvaluationResult,
    Expression,
    GroupTrace,
    Negation,
    Number,
    Reroll,
)
from dicemind.tools import calculation


LOGGER = logging.getLogger(__name__)


class Evaluator:
    """Evaluate expression trees with a given random source.

    :param rng: the random source to roll dice with; it is used exclusively
                by this evaluator for the duration of each evaluation
    :param options: evaluation options (optional)
    :param bin_ops: arithmetic operators by symbol (optional; defaults to
                    :data:`~dicemind.tools.calculation.BINARY_OPS`)
    :param comparison_ops: comparison operators by symbol (optional; defaults
                           to :data:`~dicemind.tools.calculation.COMPARISON_OPS`)

    An evaluator is not reentrant: don't share one between threads.
    """
    def __init__(
        self,
        rng: RandomSource,
        options: EvaluationOptions | None = None,
        bin_ops=None,
        comparison_ops=None,
    ) -> None:
        self.rng = rng
        self.options = options or EvaluationOptions()
        self.binary_ops = bin_ops or calculation.BINARY_OPS
        self.comparison_ops = comparison_ops or calculation.COMPARISON_OPS
        self._trace: list[GroupTrace] | None = None

    def evaluate(self, expression: Expression) -> EvaluationResult:
        """Evaluate ``expression`` and return its value.

        :param expression: a parsed expression; dice groups still holding raw
                           augmentations are resolved on the fly
        :raise ResolveError: if an augmentation is invalid
        :raise EvalError: if the expression can't be evaluated
        """
        self._trace = [] if self.options.trace_enabled else None
        try:
            value = self._eval_node(expression)
            trace = self._trace
        finally:
            self._trace = None

        if trace is not None:
            return EvaluationResult(value, tuple(trace))
        return EvaluationResult(value)

    def _eval_node(self, node: Expression):
        """Recursively evaluate the given node."""
        if isinstance(node, Number):
            return node.value

        elif isinstance(node, DiceGroup):
            return self._eval_dice(node)

        elif isinstance(node, BinaryOp):
            left = self._eval_node(node.left)
            right = self._eval_node(node.right)
            return self.binary_ops[node.op](left, right)

        elif isinstance(node, Comparison):
            left = self._eval_node(node.left)
            right = self._eval_node(node.right)
            return int(self.comparison_ops[node.op](left, right))

        elif isinstance(node, Negation):
            return -self._eval_node(node.operand)

        raise TypeError('Not an expression node: %r' % (node,))

    def _eval_dice(self, group: DiceGroup) -> int:
        sides = group.sides
        if group.is_percentile:
            sides = self.options.percentile_sides

        # Dice can't have zero or a negative number of sides.
        if sides < 1:
            raise InvalidDiceSizeError(sides)

        if group.count < 1:
            raise InvalidDiceCountError(group.count)

        if group.count > self.options.max_dice:
            raise TooManyDiceError(group.count, self.options.max_dice)

        augmentations = group.augmentations
        if not is_resolved(group):
            augmentations = resolve(augmentations, group.count, self.options)

        for augmentation in augmentations:
            # trees resolved beforehand may come with other options
            if (isinstance(augmentation, Reroll)
                    and augmentation.max_times > self.options.max_rerolls):
                raise ResolveError('Only {}/{} rerolls are allowed'.format(
                    self.options.max_rerolls, augmentation.max_times))

        pouch = DicePouch(group.count, sides, self.rng)
        for augmentation in augmentations:
            pouch.apply(augmentation)

        value = pouch.collapse()
        LOGGER.debug('Rolled %dd%d: %r = %d', group.count, sides, pouch.dice, value)

        if self._trace is not None:
            self._trace.append(pouch.trace())

        return value


def evaluate(
    source: str,
    rng: RandomSource | None = None,
    options: EvaluationOptions | None = None,
) -> EvaluationResult:
    """Lex, parse, resolve and evaluate a dice expression.

    :param source: the expression, e.g. ``"2d20kh + 3 + 2 > 13"``
    :param rng: the random source (optional; a fresh unseeded one is created
                for this call if omitted)
    :param options: evaluation options (optional)
    :raise DiceError: from the first stage that fails; see
                      :mod:`dicemind.errors`

    Every stage runs exactly once; the first failure stops the pipeline::

        >>> from dicemind import evaluate
        >>> from dicemind.roller import ReplayRandom
        >>> evaluate('4d6dh2', ReplayRandom([6, 1, 4, 2])).value
        3
    """
    options = options or EvaluationOptions()
    if rng is None:
        rng = seeded()

    expression = parse(source, compound_comparisons=options.compound_comparisons)
    expression = resolve_expression(expression, options)
    result = Evaluator(rng, options).evaluate(expression)
    LOGGER.debug('Evaluated %r to %r', source, result.value)
    return result
