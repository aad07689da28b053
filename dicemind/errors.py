"""
errors.py - Dice expression error types
Copyright 2026, dicemind contributors
Licensed under the Eiffel Forum License 2.

Every stage of the pipeline (lexing, parsing, resolving augmentations and
evaluating) raises a subclass of :class:`DiceError` and stops there: there is
never a partial result. The context needed to render a diagnostic is stored
in the exception's ``args`` and exposed through read-only properties.
"""
from __future__ import annotations

import enum


class DiceError(Exception):
    """Base exception type for all dice expression errors."""

    @property
    def position(self) -> int | None:
        """Offset in the source text where the error occurred, if known."""
        return None


class LexError(DiceError):
    """Exception type for an unrecognized character in the source text."""
    def __init__(self, position: int, char: str) -> None:
        super().__init__(position, char)

    @property
    def position(self) -> int:
        return self.args[0]

    @property
    def char(self) -> str:
        return self.args[1]

    def __str__(self) -> str:
        return 'Unrecognized character {!r} at position {}'.format(
            self.char, self.position)


class NumberTooLargeError(LexError):
    """Exception type for a numeric literal with too many digits to convert."""
    def __init__(self, position: int, text: str) -> None:
        super().__init__(position, text)

    @property
    def text(self) -> str:
        return self.args[1]

    def __str__(self) -> str:
        return 'Number of {} digits at position {} is too large'.format(
            len(self.text), self.position)


class ParseError(DiceError):
    """Exception type for a grammar violation.

    :param position: offset of the offending token
    :param expected: description of what the parser expected
    :param found: description of the token it found instead
    """
    def __init__(self, position: int, expected: str, found: str) -> None:
        super().__init__(position, expected, found)

    @property
    def position(self) -> int:
        return self.args[0]

    @property
    def expected(self) -> str:
        return self.args[1]

    @property
    def found(self) -> str:
        return self.args[2]

    def __str__(self) -> str:
        return 'Expected {} but found {} at position {}'.format(
            self.expected, self.found, self.position)


class ResolveError(DiceError):
    """Exception type for an invalid augmentation or augmentation argument."""
    def __init__(self, reason: str, position: int | None = None) -> None:
        super().__init__(reason, position)

    @property
    def reason(self) -> str:
        return self.args[0]

    @property
    def position(self) -> int | None:
        return self.args[1]

    def __str__(self) -> str:
        return self.reason


class EvalErrorKind(enum.Enum):
    """Kinds of failure that can happen while evaluating an expression."""
    DIVISION_BY_ZERO = 'division by zero'
    INVALID_DICE_SIZE = 'invalid dice size'
    INVALID_DICE_COUNT = 'invalid dice count'
    TOO_MANY_DICE = 'too many dice'
    VALUE_TOO_LARGE = 'value too large'
    RANDOM_SOURCE_EXHAUSTED = 'random source exhausted'


class EvalError(DiceError):
    """Base exception type for evaluation failures."""
    kind: EvalErrorKind


class DivisionByZeroError(EvalError):
    """Custom exception type for a division whose divisor evaluated to 0."""
    kind = EvalErrorKind.DIVISION_BY_ZERO

    def __str__(self) -> str:
        return 'Division by zero'


class InvalidDiceSizeError(EvalError):
    """Custom exception type for invalid number of die faces."""
    kind = EvalErrorKind.INVALID_DICE_SIZE

    def __init__(self, sides: int) -> None:
        super().__init__(sides)

    @property
    def sides(self) -> int:
        return self.args[0]

    def __str__(self) -> str:
        return "There are no dice with {} sides".format(self.sides)


class InvalidDiceCountError(EvalError):
    """Custom exception type for invalid numbers of dice."""
    kind = EvalErrorKind.INVALID_DICE_COUNT

    def __init__(self, count: int) -> None:
        super().__init__(count)

    @property
    def count(self) -> int:
        return self.args[0]

    def __str__(self) -> str:
        return "Can't roll {} dice".format(self.count)


class TooManyDiceError(EvalError):
    """Custom exception type for excessive numbers of dice."""
    kind = EvalErrorKind.TOO_MANY_DICE

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(requested, available)

    @property
    def available(self) -> int:
        return self.args[1]

    @property
    def requested(self) -> int:
        return self.args[0]

    def __str__(self) -> str:
        return 'Only {}/{} dice are available'.format(
            self.available, self.requested)


class ValueTooLargeError(EvalError):
    """Custom exception type for values too large to compute safely."""
    kind = EvalErrorKind.VALUE_TOO_LARGE

    def __str__(self) -> str:
        return 'Value is too large to be handled in limited time and memory'


class RandomSourceExhaustedError(EvalError):
    """Custom exception type for a replayed random source running dry."""
    kind = EvalErrorKind.RANDOM_SOURCE_EXHAUSTED

    def __init__(self, consumed: int) -> None:
        super().__init__(consumed)

    @property
    def consumed(self) -> int:
        return self.args[0]

    def __str__(self) -> str:
        return 'Random source exhausted after {} draws'.format(self.consumed)
