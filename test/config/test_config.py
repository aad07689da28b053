from __future__ import annotations

import pytest

from dicemind import config
from dicemind.config import types
from dicemind.options import EvaluationOptions


FAKE_CONFIG = """
[core]
logging_level = DEBUG

[roller]
reroll_default_cap = 3
percentile_sides = 1000
trace_enabled = yes
max_dice = 20
max_rerolls = 10
compound_comparisons = on
seed = 1234
"""


class SpamSection(types.StaticSection):
    eggs = types.ValidatedAttribute('eggs', parse=int, default=3)


class OtherSection(types.StaticSection):
    bacon = types.ValidatedAttribute('bacon')


def test_config_basename(configfactory):
    settings = configfactory('tabletop.config.cfg', '')
    assert settings.basename == 'tabletop.config'
    assert settings.filename.endswith('tabletop.config.cfg')


def test_config_homedir(configfactory, tmp_path):
    settings = configfactory('default.cfg', '')
    assert settings.homedir == str(tmp_path)


def test_config_missing_file(tmp_path):
    settings = config.Config(str(tmp_path / 'missing.cfg'))
    assert settings.roller.max_dice == 1000
    assert settings.core.logging_level == 'WARNING'


def test_config_sections(configfactory):
    settings = configfactory('default.cfg', FAKE_CONFIG)
    assert 'core' in settings
    assert 'roller' in settings
    assert 'spam' not in settings


def test_config_roller_section(configfactory):
    settings = configfactory('default.cfg', FAKE_CONFIG)
    assert settings.roller.reroll_default_cap == 3
    assert settings.roller.percentile_sides == 1000
    assert settings.roller.trace_enabled is True
    assert settings.roller.max_dice == 20
    assert settings.roller.max_rerolls == 10
    assert settings.roller.compound_comparisons is True
    assert settings.roller.seed == 1234


def test_config_roller_section_defaults(configfactory):
    settings = configfactory('default.cfg', '')
    assert settings.roller.reroll_default_cap == 1
    assert settings.roller.percentile_sides == 100
    assert settings.roller.trace_enabled is False
    assert settings.roller.max_dice == 1000
    assert settings.roller.max_rerolls == 100
    assert settings.roller.compound_comparisons is False
    assert settings.roller.seed is None


@pytest.mark.parametrize('option, value', [
    ('reroll_default_cap', '0'),
    ('percentile_sides', '-1'),
    ('max_dice', 'lots'),
    ('max_rerolls', '0'),
    ('seed', 'random'),
])
def test_config_roller_section_invalid(configfactory, option, value):
    with pytest.raises(ValueError) as exc:
        configfactory('default.cfg', '[roller]\n%s = %s\n' % (option, value))

    assert 'roller.%s' % option in str(exc.value)


def test_config_core_section(configfactory):
    settings = configfactory('default.cfg', FAKE_CONFIG)
    assert settings.core.logging_level == 'DEBUG'
    assert settings.core.logdir is None
    assert settings.core.logging_datefmt is None
    assert settings.core.logging_format == (
        '[%(asctime)s] %(name)-20s %(levelname)-8s - %(message)s')


def test_config_core_section_invalid_level(configfactory):
    with pytest.raises(ValueError):
        configfactory('default.cfg', '[core]\nlogging_level = LOUD\n')


def test_config_evaluation_options(configfactory):
    settings = configfactory('default.cfg', FAKE_CONFIG)
    assert settings.evaluation_options() == EvaluationOptions(
        reroll_default_cap=3,
        percentile_sides=1000,
        trace_enabled=True,
        max_dice=20,
        max_rerolls=10,
        compound_comparisons=True,
    )


def test_config_evaluation_options_reroll_cap_above_limit(configfactory):
    settings = configfactory(
        'default.cfg', '[roller]\nreroll_default_cap = 5\nmax_rerolls = 4\n')
    with pytest.raises(ValueError) as exc:
        settings.evaluation_options()

    assert 'must not exceed max_rerolls' in str(exc.value)


def test_config_evaluation_options_overrides(configfactory):
    settings = configfactory('default.cfg', '')
    options = settings.evaluation_options(trace_enabled=True)
    assert options == EvaluationOptions(trace_enabled=True)


def test_config_env_override(monkeypatch, configfactory):
    monkeypatch.setenv('DICEMIND_ROLLER_MAX_DICE', '5')
    settings = configfactory('default.cfg', FAKE_CONFIG)
    assert settings.roller.max_dice == 5
    assert settings.evaluation_options().max_dice == 5


def test_define_section(configfactory):
    settings = configfactory('default.cfg', '[spam]\neggs = 12\n')
    settings.define_section('spam', SpamSection)
    assert settings.spam.eggs == 12

    # re-defining with the same class is allowed
    settings.define_section('spam', SpamSection)


def test_define_section_conflict(configfactory):
    settings = configfactory('default.cfg', '')
    settings.define_section('spam', SpamSection)
    with pytest.raises(ValueError):
        settings.define_section('spam', OtherSection)


def test_define_section_not_static(configfactory):
    settings = configfactory('default.cfg', '')
    with pytest.raises(ValueError):
        settings.define_section('spam', object)


def test_modify_config_at_runtime(configfactory):
    settings = configfactory('default.cfg', FAKE_CONFIG)
    settings.roller.max_dice = 50
    settings.roller.trace_enabled = False

    assert settings.roller.max_dice == 50
    assert settings.roller.trace_enabled is False
    assert settings.get('roller', 'max_dice') == '50'
    options = settings.evaluation_options()
    assert options.max_dice == 50
    assert options.trace_enabled is False
    assert options.percentile_sides == 1000


def test_configuration_not_found():
    error = config.ConfigurationNotFound('/nowhere/default.cfg')
    assert error.filename == '/nowhere/default.cfg'
    assert str(error) == 'Unable to find the configuration file /nowhere/default.cfg'
    assert isinstance(error, config.ConfigurationError)


def test_configuration_error():
    error = config.ConfigurationError('Bad value')
    assert str(error) == 'ConfigurationError: Bad value'
