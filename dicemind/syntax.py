"""
syntax.py - Dice expression data model
Copyright 2026, dicemind contributors
Licensed under the Eiffel Forum License 2.

Expression trees are made of immutable :class:`~typing.NamedTuple` nodes.
Each :class:`DiceGroup` carries its augmentations as an ordered tuple: the
parser stores :class:`RawAugmentation` items exactly as written, and the
resolver (:mod:`dicemind.augmentation`) replaces them with typed
:class:`Filter`, :class:`Truncation`, :class:`Tally` and :class:`Reroll`
records.

The individual dice of a group are :class:`Roll` objects. They are never
removed from their group: excluding a roll only clears its ``alive`` flag,
so its ``original_index`` and last value stay available for tallies, traces
and tie-breaks.
"""
from __future__ import annotations

import enum
from typing import NamedTuple, Optional, Tuple, Union


PERCENTILE = '%'
"""Sides marker of a percentile die (``d%``)."""


class Mode(enum.Enum):
    """Whether an augmentation keeps or drops the rolls it selects."""
    KEEP = 'k'
    DROP = 'd'


class Extreme(enum.Enum):
    """Which end of the ranking a truncation selects."""
    HIGHEST = 'h'
    LOWEST = 'l'


class Relation(enum.Enum):
    """Relation between a roll's value and a predicate's value."""
    EQUALS = '='
    GREATER = '>'
    LESS = '<'


class Number(NamedTuple):
    """A constant."""
    value: Union[int, float]


class DiceGroup(NamedTuple):
    """A dice term, such as ``4d6dl`` or ``d%``."""
    count: int
    sides: Union[int, str]
    """Number of faces, or :data:`PERCENTILE`."""
    augmentations: tuple = ()
    """Raw augmentations once parsed, resolved ones once resolved."""
    position: int = 0
    """Offset of the dice term in the source text."""

    @property
    def is_percentile(self) -> bool:
        return self.sides == PERCENTILE


class BinaryOp(NamedTuple):
    """Arithmetic operation: ``+``, ``-``, ``*`` or ``/``."""
    op: str
    left: Expression
    right: Expression


class Comparison(NamedTuple):
    """Comparison of two operands, evaluating to ``1`` or ``0``."""
    op: str
    left: Expression
    right: Expression


class Negation(NamedTuple):
    """Unary minus."""
    operand: Expression


Expression = Union[Number, DiceGroup, BinaryOp, Comparison, Negation]


class RawAugmentation(NamedTuple):
    """An augmentation exactly as written after a dice term.

    Nothing is validated here: a missing argument or a negative count is
    only reported by the resolver, so that syntax errors and semantic errors
    stay distinguishable.
    """
    letter: str
    """One of ``d``, ``k``, ``h``, ``l``, ``n``, ``r``."""
    prefix: Optional[str] = None
    """``d`` or ``k`` in front of ``h``/``l``, if any."""
    qualifier: Optional[str] = None
    """``>`` or ``<`` right after the letter, if any."""
    argument: Optional[int] = None
    limit: Optional[int] = None
    """Number following ``x`` for rerolls, if any."""
    position: int = 0


class Predicate(NamedTuple):
    """A test on the value of a single roll."""
    relation: Relation
    value: int

    def matches(self, value: int) -> bool:
        if self.relation is Relation.GREATER:
            return value > self.value
        if self.relation is Relation.LESS:
            return value < self.value
        return value == self.value


class Filter(NamedTuple):
    """Keep or drop rolls by value.

    ``Filter(Mode.DROP, p)`` is the same selection as keeping the rolls for
    which ``p`` does not match; :meth:`keeps` applies that normalization.
    The mode is kept for display only.
    """
    mode: Mode
    predicate: Predicate

    def keeps(self, value: int) -> bool:
        """Tell if a roll of ``value`` survives this filter."""
        matched = self.predicate.matches(value)
        if self.mode is Mode.KEEP:
            return matched
        return not matched


class Truncation(NamedTuple):
    """Keep or drop the ``count`` highest or lowest rolls."""
    mode: Mode
    extreme: Extreme
    count: int


class Tally(NamedTuple):
    """Collapse a group to the number of live rolls equal to ``value``."""
    value: int


class Reroll(NamedTuple):
    """Redraw rolls matching ``predicate``, at most ``max_times`` per roll."""
    predicate: Predicate
    max_times: int


Augmentation = Union[Filter, Truncation, Tally, Reroll]


class RollRecord(NamedTuple):
    """Immutable copy of a :class:`Roll`, as stored in traces."""
    original_index: int
    value: int
    alive: bool
    rerolls_used: int


class Roll:
    """A single die of a group.

    :param original_index: position of the die in its group at roll time
    :param value: the face it shows
    """
    __slots__ = ('original_index', 'value', 'alive', 'rerolls_used')

    def __init__(self, original_index: int, value: int) -> None:
        self.original_index: int = original_index
        self.value: int = value
        self.alive: bool = True
        self.rerolls_used: int = 0

    def __repr__(self) -> str:
        return '<Roll #{} value={} alive={} rerolls_used={}>'.format(
            self.original_index, self.value, self.alive, self.rerolls_used)

    def record(self) -> RollRecord:
        return RollRecord(
            self.original_index, self.value, self.alive, self.rerolls_used)


class GroupTrace(NamedTuple):
    """Outcome of one evaluated dice group."""
    sides: int
    count: int
    rolls: Tuple[RollRecord, ...]
    value: int
    """The group's collapsed value."""


class EvaluationResult(NamedTuple):
    """Result of evaluating a dice expression."""
    value: Union[int, float]
    trace: Optional[Tuple[GroupTrace, ...]] = None
    """One entry per dice group in evaluation order, when tracing is on."""
