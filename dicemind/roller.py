"""
roller.py - Random sources and dice pouches
Copyright 2010-2013, Dimitri "Tyrope" Molenaars, TyRope.nl
Copyright 2013, Ari Koivula, <ari@koivu.la>
Copyright 2026, dicemind contributors
Licensed under the Eiffel Forum License 2.

There is no module-level random generator: every evaluation receives its own
random source, so that evaluations can be replayed and run in parallel.
"""
from __future__ import annotations

from collections import deque
import logging
import random
from typing import Iterable, Protocol

from dicemind.errors import RandomSourceExhaustedError
from dicemind.syntax import (
    Augmentation,
    Extreme,
    Filter,
    GroupTrace,
    Mode,
    Reroll,
    Roll,
    Tally,
    Truncation,
)


LOGGER = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that can draw a uniform integer, like :class:`random.Random`."""
    def randint(self, a: int, b: int) -> int:
        """Return a random integer ``N`` such that ``a <= N <= b``."""


def seeded(seed: int | None = None) -> random.Random:
    """Get a new random source, reproducible when ``seed`` is given."""
    return random.Random(seed)


class ReplayRandom:
    """Random source replaying a fixed sequence of draws.

    :param draws: the values to return, in order

    Useful to reproduce a roll exactly, and in tests. Each draw must fit the
    requested range; running out of draws raises
    :class:`~dicemind.errors.RandomSourceExhaustedError`.
    """
    def __init__(self, draws: Iterable[int]) -> None:
        self._draws: deque[int] = deque(draws)
        self.consumed: int = 0

    @property
    def remaining(self) -> int:
        return len(self._draws)

    def randint(self, a: int, b: int) -> int:
        if not self._draws:
            raise RandomSourceExhaustedError(self.consumed)
        value = self._draws.popleft()
        if not a <= value <= b:
            raise ValueError(
                'Replayed draw {} is out of range [{}, {}]'.format(value, a, b))
        self.consumed += 1
        return value


class DicePouch:
    """A group of dice, rolled on creation.

    :param dice_count: the number of dice in the pouch
    :param dice_type: how many faces each die has
    :param rng: the random source to roll with

    Dice are never taken out of the pouch: dropping a die only marks it as
    not alive, and it keeps its original index and value.
    """
    def __init__(self, dice_count: int, dice_type: int, rng: RandomSource) -> None:
        self.num: int = dice_count
        self.type: int = dice_type
        self.rng = rng
        self.tally: int | None = None
        """Value counted on collapse instead of summing, if any."""

        self.dice: list[Roll] = []
        self.roll_dice()

    def roll_dice(self) -> None:
        """Roll all the dice in the pouch."""
        self.tally = None
        self.dice = [
            Roll(index, self.rng.randint(1, self.type))
            for index in range(self.num)
        ]

    def live(self) -> list[Roll]:
        """Get the dice not dropped so far, in original order."""
        return [die for die in self.dice if die.alive]

    def apply(self, augmentation: Augmentation) -> None:
        """Apply one resolved augmentation to the live dice."""
        if isinstance(augmentation, Filter):
            self.filter(augmentation)
        elif isinstance(augmentation, Truncation):
            self.truncate(augmentation)
        elif isinstance(augmentation, Reroll):
            self.reroll(augmentation)
        elif isinstance(augmentation, Tally):
            self.tally = augmentation.value
        else:
            raise TypeError('Not an augmentation: %r' % (augmentation,))

    def filter(self, augmentation: Filter) -> None:
        """Drop every live die that the filter does not keep."""
        for die in self.live():
            if not augmentation.keeps(die.value):
                die.alive = False

    def truncate(self, augmentation: Truncation) -> None:
        """Keep or drop the ``count`` highest or lowest live dice.

        Ties are broken by original index, lowest first. A count larger than
        the number of live dice selects all of them.
        """
        if augmentation.extreme is Extreme.HIGHEST:
            ranked = sorted(
                self.live(), key=lambda die: (-die.value, die.original_index))
        else:
            ranked = sorted(
                self.live(), key=lambda die: (die.value, die.original_index))

        if augmentation.mode is Mode.DROP:
            dropped = ranked[:augmentation.count]
        else:
            dropped = ranked[augmentation.count:]

        for die in dropped:
            die.alive = False

    def reroll(self, augmentation: Reroll) -> None:
        """Redraw live dice matching the predicate, up to the cap per die.

        The cap bounds the total number of redraws of a die, including those
        made by previous reroll augmentations of the group. A die keeps its
        last value once the cap is reached, even when that value still
        matches.
        """
        predicate = augmentation.predicate
        for die in self.live():
            while (die.rerolls_used < augmentation.max_times
                    and predicate.matches(die.value)):
                die.value = self.rng.randint(1, self.type)
                die.rerolls_used += 1

    def get_sum(self) -> int:
        """Get the sum of non-dropped dice."""
        return sum(die.value for die in self.dice if die.alive)

    def get_tally(self, value: int) -> int:
        """Count the non-dropped dice showing ``value``."""
        return sum(1 for die in self.dice if die.alive and die.value == value)

    def collapse(self) -> int:
        """Reduce the pouch to a single value: its tally or its sum."""
        if self.tally is not None:
            return self.get_tally(self.tally)
        return self.get_sum()

    def trace(self) -> GroupTrace:
        """Take a snapshot of the pouch."""
        return GroupTrace(
            sides=self.type,
            count=self.num,
            rolls=tuple(die.record() for die in self.dice),
            value=self.collapse(),
        )
