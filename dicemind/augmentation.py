"""
augmentation.py - Augmentation resolver
Copyright 2026, dicemind contributors
Licensed under the Eiffel Forum License 2.

Turns the raw augmentation tokens recorded by the parser into typed,
validated augmentation records. Only checks that do not depend on the rolled
values happen here: a truncation count larger than the group is fine, since
previous filters may shrink the group in ways only known after rolling.
"""
from __future__ import annotations

import logging
from typing import Iterable

from dicemind.errors import ResolveError
from dicemind.options import EvaluationOptions
from dicemind.syntax import (
    Augmentation,
    BinaryOp,
    Comparison,
    DiceGroup,
    Expression,
    Extreme,
    Filter,
    Mode,
    Negation,
    Predicate,
    RawAugmentation,
    Relation,
    Reroll,
    Tally,
    Truncation,
)


LOGGER = logging.getLogger(__name__)

DEFAULT_TRUNCATION_COUNT = 1
"""Count of ``kh``, ``dl``, etc. when written without a number."""

FILTER_LETTERS = {
    'k': Mode.KEEP,
    'd': Mode.DROP,
}
TRUNCATION_LETTERS = {
    'h': Extreme.HIGHEST,
    'l': Extreme.LOWEST,
}
RELATIONS = {
    None: Relation.EQUALS,
    '>': Relation.GREATER,
    '<': Relation.LESS,
}


def _predicate(raw: RawAugmentation) -> Predicate:
    if raw.argument is None:
        raise ResolveError(
            'Augmentation {!r} requires a value'.format(raw.letter),
            raw.position)
    return Predicate(RELATIONS[raw.qualifier], raw.argument)


def _reject_qualifier(raw: RawAugmentation) -> None:
    if raw.qualifier is not None:
        raise ResolveError(
            'Augmentation {!r} does not accept {!r}'.format(
                raw.letter, raw.qualifier),
            raw.position)


def _resolve_one(raw: RawAugmentation, options: EvaluationOptions) -> Augmentation:
    if raw.qualifier not in RELATIONS:
        raise ResolveError(
            'Unknown qualifier {!r}'.format(raw.qualifier), raw.position)

    if raw.letter in TRUNCATION_LETTERS:
        _reject_qualifier(raw)
        if raw.prefix is not None and raw.prefix not in FILTER_LETTERS:
            raise ResolveError(
                'Unknown truncation prefix {!r}'.format(raw.prefix),
                raw.position)
        mode = FILTER_LETTERS.get(raw.prefix, Mode.KEEP)
        count = raw.argument
        if count is None:
            count = DEFAULT_TRUNCATION_COUNT
        if count < 0:
            raise ResolveError(
                "Can't {} {} dice".format(
                    'keep' if mode is Mode.KEEP else 'drop', count),
                raw.position)
        return Truncation(mode, TRUNCATION_LETTERS[raw.letter], count)

    if raw.prefix is not None:
        raise ResolveError(
            'Augmentation {!r} does not accept a prefix'.format(raw.letter),
            raw.position)

    if raw.letter in FILTER_LETTERS:
        return Filter(FILTER_LETTERS[raw.letter], _predicate(raw))

    if raw.letter == 'n':
        _reject_qualifier(raw)
        if raw.argument is None:
            raise ResolveError('Tally requires a value', raw.position)
        return Tally(raw.argument)

    if raw.letter == 'r':
        predicate = _predicate(raw)
        max_times = raw.limit
        if max_times is None:
            max_times = options.reroll_default_cap
        if max_times < 0:
            raise ResolveError(
                "Can't reroll {} times".format(max_times), raw.position)
        if max_times > options.max_rerolls:
            raise ResolveError(
                'Only {}/{} rerolls are allowed'.format(
                    options.max_rerolls, max_times),
                raw.position)
        return Reroll(predicate, max_times)

    raise ResolveError(
        'Unknown augmentation {!r}'.format(raw.letter), raw.position)


def resolve(
    raw_augmentations: Iterable[RawAugmentation],
    group_size: int,
    options: EvaluationOptions | None = None,
) -> tuple[Augmentation, ...]:
    """Resolve the raw augmentations of a dice group, keeping their order.

    :param raw_augmentations: augmentations as recorded by the parser
    :param group_size: number of dice in the group
    :param options: evaluation options; provide the reroll cap used when
                    ``xN`` is omitted and the upper limit of that cap
    :return: the resolved augmentations, in source order
    :raise ResolveError: for an unknown letter, a missing required argument,
                         a second tally, a negative count, or a reroll cap
                         above ``max_rerolls``
    """
    options = options or EvaluationOptions()
    resolved: list[Augmentation] = []
    tallied = False

    for raw in raw_augmentations:
        augmentation = _resolve_one(raw, options)

        if isinstance(augmentation, Tally):
            if tallied:
                raise ResolveError(
                    'A dice group can only have one tally', raw.position)
            tallied = True

        if isinstance(augmentation, Truncation) and augmentation.count > group_size:
            LOGGER.debug(
                'Truncation of %d dice on a group of %d will be clamped',
                augmentation.count, group_size)

        resolved.append(augmentation)

    return tuple(resolved)


def is_resolved(group: DiceGroup) -> bool:
    """Tell if none of the group's augmentations is still raw."""
    return not any(
        isinstance(augmentation, RawAugmentation)
        for augmentation in group.augmentations)


def resolve_expression(
    expression: Expression,
    options: EvaluationOptions | None = None,
) -> Expression:
    """Return a copy of ``expression`` with all dice groups resolved.

    :raise ResolveError: from the first dice group that fails to resolve
    """
    if isinstance(expression, DiceGroup):
        if is_resolved(expression):
            return expression
        return expression._replace(augmentations=resolve(
            expression.augmentations, expression.count, options))

    if isinstance(expression, (BinaryOp, Comparison)):
        return expression._replace(
            left=resolve_expression(expression.left, options),
            right=resolve_expression(expression.right, options),
        )

    if isinstance(expression, Negation):
        return Negation(resolve_expression(expression.operand, options))

    return expression
