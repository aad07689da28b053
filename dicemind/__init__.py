"""
dicemind is a dice notation engine for tabletop role-playing games.

It parses expressions such as ``2d20kh + 3 + 2 > 13`` or ``4d6dl`` and
evaluates them with an explicit, replayable random source.
"""
#
# Copyright 2026, dicemind contributors
#
# Licensed under the Eiffel Forum License 2.

from __future__ import annotations

from collections import namedtuple
import importlib.metadata
import re

from dicemind.errors import DiceError
from dicemind.evaluator import evaluate, Evaluator
from dicemind.options import EvaluationOptions
from dicemind.parser import parse
from dicemind.syntax import EvaluationResult


__all__ = [
    'augmentation',
    'config',
    'errors',
    'evaluator',
    'formatting',
    'lexer',
    'logger',
    'options',
    'parser',
    'roller',
    'simplify',
    'syntax',
    'tools',
    'version_info',
    # shortcuts
    'DiceError',
    'EvaluationOptions',
    'EvaluationResult',
    'Evaluator',
    'evaluate',
    'parse',
]


__version__ = importlib.metadata.version('dicemind')


def _version_info(version=__version__):
    regex = re.compile(r'(\d+)\.(\d+)\.(\d+)(?:[\-\.]?(a|b|rc)(\d+))?.*')
    version_match = regex.match(version)

    if version_match is None:
        raise RuntimeError("Can't parse version number!")

    version_groups = version_match.groups()
    major, minor, micro = (int(piece) for piece in version_groups[0:3])
    level = version_groups[3]
    serial = int(version_groups[4] or 0)
    if level == 'a':
        level = 'alpha'
    elif level == 'b':
        level = 'beta'
    elif level == 'rc':
        level = 'candidate'
    elif not level and version_groups[4] is None:
        level = 'final'
    else:
        level = 'alpha'

    VersionInfo = namedtuple('VersionInfo',
                             'major, minor, micro, releaselevel, serial')
    return VersionInfo(major, minor, micro, level, serial)


version_info = _version_info()
