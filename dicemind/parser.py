"""
parser.py - Dice expression parser
Copyright 2026, dicemind contributors
Licensed under the Eiffel Forum License 2.

Precedence-climbing parser turning tokens into an expression tree.

Operators, from lowest to highest precedence:

* comparison: ``>``, ``<``, ``=`` (and ``>=``, ``<=`` when enabled);
  non-associative, so ``1 < 2 < 3`` is an error
* additive: ``+``, ``-``
* multiplicative: ``*``, ``/``
* unary minus
* primary: number, parenthesized expression, or dice term

A dice term is ``[count] d (sides | %)`` followed by any number of
augmentations, which are recorded as
:class:`~dicemind.syntax.RawAugmentation` without being interpreted.

Inside an augmentation chain, a ``>`` or ``<`` right after ``d``, ``k`` or
``r`` qualifies that augmentation; everywhere else it is a comparison. A
``d`` after a dice term always starts an augmentation, never a new term.
"""
from __future__ import annotations

import logging
from typing import Sequence, Union

from dicemind.errors import ParseError
from dicemind.lexer import Token, TokenKind, tokenize
from dicemind.syntax import (
    BinaryOp,
    Comparison,
    DiceGroup,
    Expression,
    Negation,
    Number,
    PERCENTILE,
    RawAugmentation,
)


LOGGER = logging.getLogger(__name__)

COMPARISON_LEVEL = 1
ADDITIVE_LEVEL = 2
MULTIPLICATIVE_LEVEL = 3

PRECEDENCE = {
    TokenKind.GREATER: COMPARISON_LEVEL,
    TokenKind.LESS: COMPARISON_LEVEL,
    TokenKind.EQUALS: COMPARISON_LEVEL,
    TokenKind.GREATER_EQUAL: COMPARISON_LEVEL,
    TokenKind.LESS_EQUAL: COMPARISON_LEVEL,
    TokenKind.PLUS: ADDITIVE_LEVEL,
    TokenKind.MINUS: ADDITIVE_LEVEL,
    TokenKind.STAR: MULTIPLICATIVE_LEVEL,
    TokenKind.SLASH: MULTIPLICATIVE_LEVEL,
}
"""Binary operator precedence table; higher binds tighter."""

QUALIFIERS = {
    TokenKind.GREATER: '>',
    TokenKind.LESS: '<',
}

EXPECTED_OPERAND = 'number, dice or parenthesis'


class Parser:
    """Parse a list of tokens into a single expression tree.

    :param tokens: tokens produced by :func:`~dicemind.lexer.tokenize`; the
                   last one must be a :attr:`~TokenKind.END` token

    A parser is single-use: call :meth:`parse` once.
    """
    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tokens
        self.index = 0

    def peek(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind is not TokenKind.END:
            self.index += 1
        return token

    def accept(self, *kinds: TokenKind) -> Token | None:
        """Consume and return the next token if it is one of ``kinds``."""
        if self.peek().kind in kinds:
            return self.advance()
        return None

    def expect(self, kind: TokenKind, expected: str) -> Token:
        token = self.peek()
        if token.kind is not kind:
            raise ParseError(token.position, expected, token.describe())
        return self.advance()

    def parse(self) -> Expression:
        """Parse the whole token list.

        :raise ParseError: on the first unexpected token
        """
        if self.peek().kind is TokenKind.END:
            raise ParseError(self.peek().position, 'expression',
                             TokenKind.END.value)
        expression = self.parse_expression(COMPARISON_LEVEL)
        self.expect(TokenKind.END, 'operator or end of input')
        return expression

    def parse_expression(self, min_level: int) -> Expression:
        """Parse operators binding at least as tight as ``min_level``."""
        left = self.parse_unary()
        compared = False

        while True:
            token = self.peek()
            level = PRECEDENCE.get(token.kind)
            if level is None or level < min_level:
                break

            if level == COMPARISON_LEVEL and compared:
                raise ParseError(
                    token.position, 'arithmetic operator or end of comparison',
                    token.describe())

            self.advance()
            right = self.parse_expression(level + 1)

            if level == COMPARISON_LEVEL:
                left = Comparison(token.kind.value, left, right)
                compared = True
            else:
                left = BinaryOp(token.kind.value, left, right)

        return left

    def parse_unary(self) -> Expression:
        if self.accept(TokenKind.MINUS):
            return Negation(self.parse_primary())
        return self.parse_primary()

    def parse_primary(self) -> Expression:
        token = self.peek()

        if token.kind is TokenKind.NUMBER:
            self.advance()
            if self.peek().kind is TokenKind.DICE:
                return self.parse_dice(token.value, token.position)
            return Number(token.value)

        if token.kind is TokenKind.DICE:
            return self.parse_dice(1, token.position)

        if token.kind is TokenKind.LPAREN:
            self.advance()
            expression = self.parse_expression(COMPARISON_LEVEL)
            self.expect(TokenKind.RPAREN, "')'")
            return expression

        raise ParseError(token.position, EXPECTED_OPERAND, token.describe())

    def parse_dice(self, count: int, position: int) -> DiceGroup:
        """Parse a dice term from its ``d``, the count being already known."""
        self.expect(TokenKind.DICE, "'d'")

        sides: int | str
        token = self.peek()
        if token.kind is TokenKind.NUMBER:
            sides = self.advance().value
        elif token.kind is TokenKind.PERCENT:
            self.advance()
            sides = PERCENTILE
        else:
            raise ParseError(token.position, "number of sides or '%'",
                             token.describe())

        augmentations = []
        while True:
            augmentation = self.parse_augmentation()
            if augmentation is None:
                break
            augmentations.append(augmentation)

        return DiceGroup(count, sides, tuple(augmentations), position)

    def parse_augmentation(self) -> RawAugmentation | None:
        """Parse the next augmentation, or return ``None`` if there is none."""
        token = self.peek()
        kind = token.kind

        if kind in (TokenKind.DICE, TokenKind.KEEP):
            self.advance()
            extreme = self.accept(TokenKind.HIGH, TokenKind.LOW)
            if extreme is not None:
                return RawAugmentation(
                    letter=extreme.kind.value,
                    prefix=kind.value,
                    argument=self.parse_argument(),
                    position=token.position,
                )
            return RawAugmentation(
                letter=kind.value,
                qualifier=self.parse_qualifier(),
                argument=self.parse_argument(),
                position=token.position,
            )

        if kind in (TokenKind.HIGH, TokenKind.LOW):
            self.advance()
            return RawAugmentation(
                letter=kind.value,
                argument=self.parse_argument(),
                position=token.position,
            )

        if kind is TokenKind.TALLY:
            self.advance()
            return RawAugmentation(
                letter=kind.value,
                argument=self.parse_argument(),
                position=token.position,
            )

        if kind is TokenKind.REROLL:
            self.advance()
            qualifier = self.parse_qualifier()
            argument = self.parse_argument()
            limit = None
            if self.accept(TokenKind.TIMES):
                limit = self.expect(
                    TokenKind.NUMBER, 'reroll limit after x').value
            return RawAugmentation(
                letter=kind.value,
                qualifier=qualifier,
                argument=argument,
                limit=limit,
                position=token.position,
            )

        return None

    def parse_qualifier(self) -> str | None:
        token = self.accept(*QUALIFIERS)
        if token is None:
            return None
        return QUALIFIERS[token.kind]

    def parse_argument(self) -> int | None:
        token = self.accept(TokenKind.NUMBER)
        if token is None:
            return None
        return token.value


def parse(
    source: Union[str, Sequence[Token]],
    compound_comparisons: bool = False,
) -> Expression:
    """Parse a dice expression.

    :param source: the expression text, or tokens already produced by
                   :func:`~dicemind.lexer.tokenize`
    :param compound_comparisons: whether ``>=`` and ``<=`` are recognized
                                 (only used when ``source`` is text)
    :return: the expression tree, with raw augmentations
    :raise LexError: if ``source`` is text containing an unknown character
    :raise ParseError: if the tokens do not form a valid expression
    """
    if isinstance(source, str):
        tokens = tokenize(source, compound_comparisons=compound_comparisons)
    else:
        tokens = source

    expression = Parser(tokens).parse()
    LOGGER.debug('Parsed expression: %r', expression)
    return expression
