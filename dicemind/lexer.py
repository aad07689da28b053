"""
lexer.py - Dice expression lexer
Copyright 2026, dicemind contributors
Licensed under the Eiffel Forum License 2.

The lexer turns source text into a flat list of :class:`Token`. It knows
nothing about dice: the letter ``d`` is a single token kind whether it
introduces a dice term or a drop augmentation, and ``>``/``<`` are the same
tokens whether they compare two operands or qualify an augmentation. Telling
these apart is the parser's job.
"""
from __future__ import annotations

import enum
import logging
import re
from typing import NamedTuple

from dicemind.errors import LexError, NumberTooLargeError


LOGGER = logging.getLogger(__name__)

_NUMBER = re.compile(r'[0-9]+')


class TokenKind(enum.Enum):
    """Kinds of token produced by :func:`tokenize`."""
    NUMBER = 'number'
    DICE = 'd'
    """Dice marker, or drop augmentation letter."""
    PERCENT = '%'
    KEEP = 'k'
    HIGH = 'h'
    LOW = 'l'
    TALLY = 'n'
    REROLL = 'r'
    TIMES = 'x'
    """Reroll limit marker."""
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    SLASH = '/'
    GREATER = '>'
    LESS = '<'
    EQUALS = '='
    GREATER_EQUAL = '>='
    LESS_EQUAL = '<='
    LPAREN = '('
    RPAREN = ')'
    END = 'end of input'


SINGLE_CHARACTERS = {
    kind.value: kind
    for kind in TokenKind
    if len(kind.value) == 1
}
"""Single-character tokens, by their (lowercase) character."""

COMPOUND_COMPARISONS = {
    '>=': TokenKind.GREATER_EQUAL,
    '<=': TokenKind.LESS_EQUAL,
}
"""Two-character comparison tokens, only recognized when enabled."""


class Token(NamedTuple):
    """A single token of a dice expression."""
    kind: TokenKind
    text: str
    """The exact source text of the token."""
    position: int
    """Offset of the token's first character in the source text."""

    @property
    def value(self) -> int:
        """Integer value of a :attr:`TokenKind.NUMBER` token."""
        return int(self.text)

    def describe(self) -> str:
        """Describe the token for error messages."""
        if self.kind is TokenKind.END:
            return TokenKind.END.value
        return repr(self.text)


def tokenize(text: str, compound_comparisons: bool = False) -> list[Token]:
    """Split ``text`` into a list of tokens.

    :param text: the dice expression to tokenize
    :param compound_comparisons: whether ``>=`` and ``<=`` are single tokens;
                                 when ``False`` they are two tokens each
    :return: the tokens, always terminated by a :attr:`TokenKind.END` token
    :raise LexError: on the first character that is not part of the language
    :raise NumberTooLargeError: on a number with too many digits to convert

    Whitespace is skipped, letters are case-insensitive, and numbers are
    unsigned integers: a leading ``-`` is always a separate token.
    """
    tokens: list[Token] = []
    position = 0
    length = len(text)

    while position < length:
        char = text[position]

        if char.isspace():
            position += 1
            continue

        match = _NUMBER.match(text, position)
        if match:
            try:
                int(match.group())
            except ValueError:
                # beyond the interpreter's integer string conversion limit
                raise NumberTooLargeError(position, match.group())
            tokens.append(Token(TokenKind.NUMBER, match.group(), position))
            position = match.end()
            continue

        if compound_comparisons:
            pair = text[position:position + 2]
            if pair in COMPOUND_COMPARISONS:
                tokens.append(Token(COMPOUND_COMPARISONS[pair], pair, position))
                position += 2
                continue

        kind = SINGLE_CHARACTERS.get(char.lower())
        if kind is None:
            raise LexError(position, char)

        tokens.append(Token(kind, char, position))
        position += 1

    tokens.append(Token(TokenKind.END, '', length))
    LOGGER.debug('Tokenized %r into %d tokens', text, len(tokens))
    return tokens
