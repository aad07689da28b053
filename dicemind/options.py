"""Options controlling how dice expressions are parsed and evaluated."""
from __future__ import annotations

from typing import Any


MAX_DICE = 1000
"""Default upper limit for the number of dice in a single group."""

MAX_REROLLS = 100
"""Default upper limit for the number of times a single die is rerolled."""

DEFAULT_PERCENTILE_SIDES = 100
DEFAULT_REROLL_CAP = 1


class EvaluationOptions:
    """Evaluation settings.

    :param reroll_default_cap: how many times a reroll augmentation without
                               an explicit ``xN`` may redraw a single die
    :param percentile_sides: number of faces of a ``d%`` die
    :param trace_enabled: whether to record every dice group's rolls in the
                          :class:`~dicemind.syntax.EvaluationResult`
    :param max_dice: upper limit for the number of dice in a single group
    :param max_rerolls: upper limit for the number of times a reroll
                        augmentation may redraw a single die
    :param compound_comparisons: whether ``>=`` and ``<=`` are part of the
                                 grammar
    :raise ValueError: if a numeric option is out of range

    Options are immutable; use :meth:`replace` to derive new ones.
    """
    __slots__ = (
        'reroll_default_cap',
        'percentile_sides',
        'trace_enabled',
        'max_dice',
        'max_rerolls',
        'compound_comparisons',
    )

    def __init__(
        self,
        reroll_default_cap: int = DEFAULT_REROLL_CAP,
        percentile_sides: int = DEFAULT_PERCENTILE_SIDES,
        trace_enabled: bool = False,
        max_dice: int = MAX_DICE,
        max_rerolls: int = MAX_REROLLS,
        compound_comparisons: bool = False,
    ) -> None:
        if reroll_default_cap < 1:
            raise ValueError(
                'reroll_default_cap must be a positive integer, not %r'
                % reroll_default_cap)
        if percentile_sides < 1:
            raise ValueError(
                'percentile_sides must be a positive integer, not %r'
                % percentile_sides)
        if max_dice < 1:
            raise ValueError(
                'max_dice must be a positive integer, not %r' % max_dice)
        if max_rerolls < 1:
            raise ValueError(
                'max_rerolls must be a positive integer, not %r' % max_rerolls)
        if reroll_default_cap > max_rerolls:
            raise ValueError(
                'reroll_default_cap (%r) must not exceed max_rerolls (%r)'
                % (reroll_default_cap, max_rerolls))

        set_ = object.__setattr__
        set_(self, 'reroll_default_cap', int(reroll_default_cap))
        set_(self, 'percentile_sides', int(percentile_sides))
        set_(self, 'trace_enabled', bool(trace_enabled))
        set_(self, 'max_dice', int(max_dice))
        set_(self, 'max_rerolls', int(max_rerolls))
        set_(self, 'compound_comparisons', bool(compound_comparisons))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError('EvaluationOptions are read-only')

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.__slots__}

    def replace(self, **changes: Any) -> EvaluationOptions:
        """Return a copy of these options with ``changes`` applied."""
        values = self.as_dict()
        values.update(changes)
        return EvaluationOptions(**values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvaluationOptions):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self) -> int:
        return hash(tuple(self.as_dict().values()))

    def __repr__(self) -> str:
        return '{}({})'.format(
            type(self).__name__,
            ', '.join('%s=%r' % item for item in self.as_dict().items()))
