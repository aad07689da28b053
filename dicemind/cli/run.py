#!/usr/bin/env python3
"""
dicemind - A dice notation engine
Copyright 2026, dicemind contributors
Licensed under the Eiffel Forum License 2.

Command line entry point: ``dicemind roll`` and ``dicemind simulate``.
"""
from __future__ import annotations

import argparse
from collections import Counter
import logging
import math
import sys

from dicemind import __version__, config, logger
from dicemind.augmentation import resolve_expression
from dicemind.errors import DiceError
from dicemind.evaluator import Evaluator
from dicemind.formatting import format_error, format_rolls
from dicemind.parser import parse
from dicemind.roller import seeded
from . import utils


LOGGER = logging.getLogger(__name__)

ERR_CODE = 1
"""Error code: program exited with an error"""

COMMANDS = ['roll', 'simulate']
DEFAULT_COMMAND = 'roll'

BAR_WIDTH = 40
"""Width of the longest bar of a simulated distribution."""


def build_parser():
    """Build an ``argparse.ArgumentParser`` for the dicemind command line

    :return: the argument parser
    :rtype: :class:`argparse.ArgumentParser`
    """
    parser = argparse.ArgumentParser(
        prog='dicemind',
        description='Roll dice expressions such as "2d20kh + 5" or "4d6dl".')
    parser.add_argument(
        '-V', '--version',
        action='store_true',
        dest='version',
        help='Show version number and exit')
    subparsers = parser.add_subparsers(
        title='subcommands',
        description='List of dicemind\'s subcommands',
        dest='action',
        metavar='{roll,simulate}')

    # manage `roll` subcommand
    parser_roll = subparsers.add_parser(
        'roll',
        description='Roll each expression and show its result. '
                    'Without expressions, they are read from stdin, one per '
                    'line. Text after a "#" is ignored. Use "--" before an '
                    'expression starting with "-".',
        help='Roll dice expressions (default)')
    parser_roll.add_argument(
        'expressions',
        nargs='*',
        metavar='EXPR',
        help='Dice expression, e.g. "3d6 + 2"')
    utils.add_common_arguments(parser_roll)

    # manage `simulate` subcommand
    parser_simulate = subparsers.add_parser(
        'simulate',
        description='Roll an expression many times and show the '
                    'distribution of its results.',
        help='Show the distribution of an expression')
    parser_simulate.add_argument(
        'expression',
        metavar='EXPR',
        help='Dice expression, e.g. "4d6dl"')
    parser_simulate.add_argument(
        '-i', '--iterations',
        type=int,
        default=1000,
        dest='iterations',
        help='Number of rolls per trial (default: 1000)')
    parser_simulate.add_argument(
        '-t', '--trials',
        type=int,
        default=1,
        dest='trials',
        help='Number of trials (default: 1)')
    utils.add_common_arguments(parser_simulate)

    return parser


def print_version():
    """Print Python version and dicemind version on stdout."""
    py_ver = '%s.%s.%s' % (sys.version_info.major,
                           sys.version_info.minor,
                           sys.version_info.micro)
    print('dicemind %s (running on Python %s)' % (__version__, py_ver))


def strip_comment(line):
    """Remove the ``#`` comment and surrounding whitespace of ``line``."""
    return line.split('#', 1)[0].strip()


def read_expressions(expressions, stream=None):
    """Yield the expressions to roll.

    :param list expressions: expressions given on the command line
    :param stream: where to read expressions from when ``expressions`` is
                   empty (optional; defaults to stdin)

    Comments are stripped and blank lines are skipped.
    """
    lines = expressions or (stream or sys.stdin)
    for line in lines:
        source = strip_comment(line)
        if source:
            yield source


def format_value(value):
    """Format a result for display; floats get at most 4 decimals.

    Integers with too many digits to be converted to a string are shown in
    scientific notation, such as ``9.9999e+5999``.
    """
    if isinstance(value, float):
        return ('%.4f' % value).rstrip('0').rstrip('.')
    try:
        return str(value)
    except ValueError:
        return format_scientific(value)


def format_scientific(value, digits=5):
    """Format a (huge) integer in scientific notation, truncating its mantissa.

    :param int value: the integer to format
    :param int digits: number of significant digits to show
    """
    sign = '-' if value < 0 else ''
    value = abs(value)
    if value == 0:
        return '0'
    # log10 is approximate, the length of the leading digits corrects it
    shift = max(0, math.floor(math.log10(value)) - digits + 1)
    leading = str(value // 10 ** shift)
    while len(leading) < digits and shift > 0:
        shift -= 1
        leading = str(value // 10 ** shift)
    exponent = shift + len(leading) - 1
    mantissa = leading[0]
    if len(leading) > 1:
        mantissa += '.' + leading[1:digits]
    return '%s%se+%d' % (sign, mantissa, exponent)


def get_settings(opts):
    """Load the settings and the evaluation options from ``opts``.

    :return: a 2-value tuple ``(settings, options)``
    """
    settings = utils.load_settings(opts)
    overrides = {}
    if opts.trace:
        overrides['trace_enabled'] = True
    return settings, settings.evaluation_options(**overrides)


def get_seed(opts, settings):
    if opts.seed is not None:
        return opts.seed
    return settings.roller.seed


def roll_one(source, evaluator, options):
    """Roll a single expression and return the line to display.

    :raise DiceError: when the expression is invalid
    """
    expression = parse(source, compound_comparisons=options.compound_comparisons)
    expression = resolve_expression(expression, options)
    result = evaluator.evaluate(expression)
    value = format_value(result.value)
    if result.trace is None:
        return '%s = %s' % (source, value)
    return '%s: %s = %s' % (source, format_rolls(expression, result.trace), value)


def command_roll(opts, settings, options):
    """Roll every expression, reporting errors without stopping."""
    evaluator = Evaluator(seeded(get_seed(opts, settings)), options)
    ret = 0
    for source in read_expressions(opts.expressions):
        try:
            print(roll_one(source, evaluator, options))
        except DiceError as error:
            LOGGER.debug('Invalid expression %r: %r', source, error)
            utils.stderr(utils.red(format_error(source, error)))
            ret = ERR_CODE
    return ret


def command_simulate(opts, settings, options):
    """Roll one expression ``iterations`` times per trial."""
    if opts.iterations < 1 or opts.trials < 1:
        utils.stderr('Iterations and trials must be positive integers.')
        return ERR_CODE

    source = strip_comment(opts.expression)
    options = options.replace(trace_enabled=False)
    evaluator = Evaluator(seeded(get_seed(opts, settings)), options)
    try:
        expression = parse(
            source, compound_comparisons=options.compound_comparisons)
        expression = resolve_expression(expression, options)
    except DiceError as error:
        utils.stderr(utils.red(format_error(source, error)))
        return ERR_CODE

    for trial in range(1, opts.trials + 1):
        try:
            results = Counter(
                evaluator.evaluate(expression).value
                for _ in range(opts.iterations))
        except DiceError as error:
            utils.stderr(utils.red(format_error(source, error)))
            return ERR_CODE

        if opts.trials > 1:
            print('Trial %d:' % trial)
        for line in format_distribution(results):
            print(line)
        total = sum(value * freq for value, freq in results.items())
        try:
            print('Mean: %.2f' % (total / opts.iterations))
        except OverflowError:
            print('Mean: %s' % format_value(total // opts.iterations))

    return 0


def format_distribution(results):
    """Yield one ``value frequency bar`` line per result value.

    :param results: frequency of each value
    :type results: :class:`collections.Counter`
    """
    highest = max(results.values())
    width = max(len(format_value(value)) for value in results)
    for value in sorted(results):
        freq = results[value]
        bar = '#' * max(1, round(freq * BAR_WIDTH / highest))
        yield '%s %6d %s' % (format_value(value).rjust(width), freq, bar)


def main(argv=None):
    """dicemind run script entry point"""
    try:
        # Step One: Parse The Command Line
        parser = build_parser()

        # make sure to have an action first (`roll` by default)
        argv = sys.argv[1:] if argv is None else argv
        if argv and argv[0] not in COMMANDS + ['-h', '--help', '-V', '--version']:
            argv = [DEFAULT_COMMAND] + argv
        elif not argv:
            argv = [DEFAULT_COMMAND]

        opts = parser.parse_args(argv)

        if opts.version:
            print_version()
            return

        # Step Two: Load the settings
        try:
            settings, options = get_settings(opts)
        except config.ConfigurationError as error:
            utils.stderr('%s' % error)
            return ERR_CODE
        except ValueError as error:
            utils.stderr('Invalid configuration: %s' % error)
            return ERR_CODE

        logger.setup_logging(settings)

        # Step Three: Handle command
        command = {
            'roll': command_roll,
            'simulate': command_simulate,
        }.get(opts.action)
        return command(opts, settings, options)
    except KeyboardInterrupt:
        print("\n\nInterrupted")
        return ERR_CODE


if __name__ == '__main__':
    sys.exit(main())
