"""Tests for dicemind's logging configuration"""
from __future__ import annotations

import logging
import os

from dicemind import logger


def test_get_logging_config(configfactory):
    settings = configfactory('default.cfg', '[core]\nlogging_level = INFO\n')
    logging_config = logger.get_logging_config(settings)

    assert logging_config['version'] == 1
    assert logging_config['disable_existing_loggers'] is False
    assert logging_config['loggers']['dicemind'] == {
        'level': 'INFO',
        'handlers': ['console'],
    }
    assert logging_config['handlers']['console']['class'] == 'logging.StreamHandler'
    assert logging_config['formatters']['dicemind'] == {
        'format': settings.core.logging_format,
        'datefmt': None,
    }


def test_get_logging_config_logdir(configfactory, tmp_path):
    settings = configfactory(
        'tabletop.cfg', '[core]\nlogdir = logs\nlogging_datefmt = %H:%M\n')
    logging_config = logger.get_logging_config(settings)

    assert logging_config['loggers']['dicemind']['handlers'] == [
        'console', 'logfile']
    logfile = logging_config['handlers']['logfile']
    assert logfile['class'] == 'logging.handlers.TimedRotatingFileHandler'
    assert logfile['filename'] == os.path.join(
        str(tmp_path), 'logs', 'tabletop.dicemind.log')
    assert logging_config['formatters']['dicemind']['datefmt'] == '%H:%M'


def test_setup_logging(configfactory):
    settings = configfactory('default.cfg', '[core]\nlogging_level = DEBUG\n')
    logger.setup_logging(settings)

    assert logging.getLogger('dicemind').level == logging.DEBUG
    assert logging.getLogger('dicemind.evaluator').getEffectiveLevel() == (
        logging.DEBUG)


def test_setup_logging_file(configfactory, tmp_path):
    settings = configfactory('default.cfg', '[core]\nlogdir = logs\n')
    logger.setup_logging(settings)

    logging.getLogger('dicemind.test').warning('Rolled a natural 1')
    for handler in logging.getLogger('dicemind').handlers:
        handler.flush()

    logfile = tmp_path / 'logs' / 'default.dicemind.log'
    assert 'Rolled a natural 1' in logfile.read_text()
