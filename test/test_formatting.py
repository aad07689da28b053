"""Tests for text formatting of expressions and rolls"""
from __future__ import annotations

import pytest

from dicemind import evaluate
from dicemind.augmentation import resolve_expression
from dicemind.errors import DivisionByZeroError, LexError, ParseError
from dicemind.formatting import (
    format_augmentation,
    format_error,
    format_expression,
    format_group,
    format_rolls,
    get_compressed_string,
    get_number_of_faces,
    get_simple_string,
)
from dicemind.options import EvaluationOptions
from dicemind.parser import parse
from dicemind.syntax import (
    BinaryOp,
    Comparison,
    Negation,
    Number,
    RawAugmentation,
)
from dicemind.tests import group_trace


TRACED = EvaluationOptions(trace_enabled=True)


@pytest.mark.parametrize('text, expected', [
    ('1+2', '1 + 2'),
    ('2d6+2', '2d6 + 2'),
    ('d20', 'd20'),
    ('d%', 'd%'),
    ('(1 + 2) * 3', '(1 + 2) * 3'),
    ('1 + 2 * 3', '1 + 2 * 3'),
    ('1 - (2 - 3)', '1 - (2 - 3)'),
    ('8 - 4 - 2', '8 - 4 - 2'),
    ('-(1 + 2)', '-(1 + 2)'),
    ('-(-3)', '-(-3)'),
    ('-d6', '-d6'),
    ('2 * -3', '2 * -3'),
    ('(1 < 2) = 1', '(1 < 2) = 1'),
    ('2d6 + 3 > 1d8', '2d6 + 3 > d8'),
    ('4d6dl', '4d6dl'),
    ('4d6k>3r1x2n6', '4d6k>3r1x2n6'),
])
def test_format_expression(text, expected):
    assert format_expression(parse(text)) == expected


@pytest.mark.parametrize('text, expected', [
    ('4d6dl', '4d6dl1'),
    ('4d6h', '4d6kh1'),
    ('4d6k>3', '4d6k>3'),
    ('4d6d1', '4d6d1'),
    ('4d6r<2', '4d6r<2x1'),
    ('6d6n6', '6d6n6'),
])
def test_format_resolved_expression(text, expected):
    assert format_expression(resolve_expression(parse(text))) == expected


def test_format_expression_reparses():
    text = '-(2d6kh + 3) * (4 - d%) > 2 / (1 + 1)'
    expression = parse(text)
    assert parse(format_expression(expression)) == parse(
        '-(2d6kh + 3) * (4 - d%) > 2 / (1 + 1)')
    assert format_expression(parse(format_expression(expression))) == (
        format_expression(expression))


def test_format_expression_built_tree():
    expression = Comparison(
        '>', Comparison('<', Number(1), Number(2)), Negation(Number(3)))
    assert format_expression(expression) == '(1 < 2) > -3'

    expression = BinaryOp('*', BinaryOp('+', Number(1), Number(2)), Number(3))
    assert format_expression(expression) == '(1 + 2) * 3'


def test_format_augmentation_unknown():
    with pytest.raises(TypeError):
        format_augmentation('kh')


def test_format_augmentation_raw():
    raw = RawAugmentation('r', qualifier='>', argument=4, limit=3)
    assert format_augmentation(raw) == 'r>4x3'


def test_get_simple_string():
    trace = group_trace(6, 6, 1, 4, 2, dropped=[0, 2])
    assert get_simple_string(trace) == '(1+2[+6+4])'

    trace = group_trace(6, 3, 5)
    assert get_simple_string(trace) == '(3+5)'


def test_get_simple_string_all_dropped():
    trace = group_trace(6, 3, 5, dropped=[0, 1])
    assert get_simple_string(trace) == '([+3+5])'


def test_get_compressed_string():
    trace = group_trace(6, 6, 6, 6, 2, 2, dropped=[3])
    assert get_compressed_string(trace) == '(3x6+1x2[+1x2])'
    assert get_number_of_faces(trace) == 3


def test_format_group_sizes():
    small = group_trace(6, 1, 2, 3)
    assert format_group(small) == '(1+2+3)'

    large = group_trace(2, *([1, 2] * 6))
    assert format_group(large) == '(6x1+6x2)'

    many_faces = group_trace(20, *range(1, 21))
    assert format_group(many_faces) == '(...)'


def test_format_rolls(replay):
    expression = resolve_expression(parse('2d20kh + 3 + 2 > 13'))
    result = evaluate('2d20kh + 3 + 2 > 13', replay(14, 9), TRACED)
    assert format_rolls(expression, result.trace) == '(14[+9]) + 3 + 2 > 13'


def test_format_rolls_several_groups(replay):
    text = '(2d6 + 2) * (2d20kh + 3 + 2 > 13)'
    result = evaluate(text, replay(2, 4, 14, 9), TRACED)
    assert format_rolls(parse(text), result.trace) == (
        '((2+4) + 2) * ((14[+9]) + 3 + 2 > 13)')


def test_format_rolls_missing_trace():
    expression = parse('2d6 + d4')
    traces = [group_trace(6, 3, 4)]
    assert format_rolls(expression, traces) == '(3+4) + d4'


def test_format_error_with_position():
    source = '2d6 + ?'
    try:
        parse(source)
    except LexError as error:
        message = format_error(source, error)

    assert message == (
        '2d6 + ?\n'
        '      ^\n'
        "Unrecognized character '?' at position 6")


def test_format_error_parse():
    source = '2d6 +'
    with pytest.raises(ParseError) as exc:
        parse(source)

    lines = format_error(source, exc.value).splitlines()
    assert lines[1] == '     ^'


def test_format_error_without_position():
    assert format_error('1 / 0', DivisionByZeroError()) == 'Division by zero'
