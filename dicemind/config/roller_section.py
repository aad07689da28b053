from __future__ import annotations

from dicemind.config.types import (
    BooleanAttribute,
    StaticSection,
    ValidatedAttribute,
)
from dicemind.options import (
    DEFAULT_PERCENTILE_SIDES,
    DEFAULT_REROLL_CAP,
    EvaluationOptions,
    MAX_DICE,
    MAX_REROLLS,
)


def _positive_int(value):
    """Parse ``value`` as a strictly positive integer.

    :raise ValueError: if it is not an integer, or if it is not positive
    """
    number = int(value)
    if number < 1:
        raise ValueError('Value must be a positive integer, not %r' % value)
    return number


def _optional_int(value):
    if value is None or value == '':
        return None
    return int(value)


class RollerSection(StaticSection):
    """The config section controlling how expressions are evaluated.

    .. code-block:: ini

        [roller]
        reroll_default_cap = 3
        percentile_sides = 100
        trace_enabled = yes

    """

    reroll_default_cap = ValidatedAttribute(
        'reroll_default_cap',
        parse=_positive_int,
        default=DEFAULT_REROLL_CAP)
    """How many times ``r`` may redraw a die when ``xN`` is omitted.

    :default: ``1``
    """

    percentile_sides = ValidatedAttribute(
        'percentile_sides',
        parse=_positive_int,
        default=DEFAULT_PERCENTILE_SIDES)
    """Number of faces of a ``d%`` die.

    :default: ``100``
    """

    trace_enabled = BooleanAttribute('trace_enabled', default=False)
    """Whether to record and show every die of every roll.

    :default: ``False``
    """

    max_dice = ValidatedAttribute(
        'max_dice',
        parse=_positive_int,
        default=MAX_DICE)
    """Upper limit for the number of dice in a single group.

    :default: ``1000``
    """

    max_rerolls = ValidatedAttribute(
        'max_rerolls',
        parse=_positive_int,
        default=MAX_REROLLS)
    """Upper limit for the ``xN`` cap of a reroll augmentation.

    :default: ``100``

    Expressions asking for more rerolls, such as ``4d6r1x500``, are rejected.
    """

    compound_comparisons = BooleanAttribute(
        'compound_comparisons', default=False)
    """Whether ``>=`` and ``<=`` are recognized as comparison operators.

    :default: ``False``

    When disabled, ``3 >= 2`` is a syntax error.
    """

    seed = ValidatedAttribute('seed', parse=_optional_int)
    """Seed of the random source, for reproducible rolls.

    :default: none; rolls are not reproducible
    """

    def evaluation_options(self) -> EvaluationOptions:
        """Build the :class:`~dicemind.options.EvaluationOptions` of this section."""
        return EvaluationOptions(
            reroll_default_cap=self.reroll_default_cap,
            percentile_sides=self.percentile_sides,
            trace_enabled=self.trace_enabled,
            max_dice=self.max_dice,
            max_rerolls=self.max_rerolls,
            compound_comparisons=self.compound_comparisons,
        )
