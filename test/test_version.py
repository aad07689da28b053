"""Tests for dicemind's version information"""
from __future__ import annotations

import pytest

import dicemind


@pytest.mark.parametrize('version, expected', [
    ('0.1.0', (0, 1, 0, 'final', 0)),
    ('1.2.3a4', (1, 2, 3, 'alpha', 4)),
    ('1.2.3b1', (1, 2, 3, 'beta', 1)),
    ('2.0.0rc2', (2, 0, 0, 'candidate', 2)),
])
def test_version_info(version, expected):
    assert tuple(dicemind._version_info(version)) == expected


def test_version_info_invalid():
    with pytest.raises(RuntimeError):
        dicemind._version_info('latest')


def test_version():
    assert dicemind.version_info.major == int(dicemind.__version__.split('.')[0])
