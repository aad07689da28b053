"""Logging configuration for dicemind.

Library code only creates module loggers with
:func:`logging.getLogger(__name__) <logging.getLogger>` and never configures
them; :func:`setup_logging` is meant for front-ends such as the command line.
"""
from __future__ import annotations

from logging.config import dictConfig
import os


def get_logging_config(settings):
    """Build the :func:`~logging.config.dictConfig` configuration.

    :param settings: configuration settings object
    :type settings: :class:`dicemind.config.Config`
    :rtype: dict
    """
    log_directory = settings.core.logdir
    base_level = settings.core.logging_level or 'WARNING'
    base_format = settings.core.logging_format
    base_datefmt = settings.core.logging_datefmt

    handlers = ['console']

    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'dicemind': {
                'format': base_format,
                'datefmt': base_datefmt,
            },
        },
        'loggers': {
            # all purpose, dicemind root logger
            'dicemind': {
                'level': base_level,
                'handlers': handlers,
            },
        },
        'handlers': {
            # output on stderr
            'console': {
                'level': 'DEBUG',
                'class': 'logging.StreamHandler',
                'formatter': 'dicemind',
            },
        },
    }

    if log_directory:
        handlers.append('logfile')
        # generic purpose log file
        logging_config['handlers']['logfile'] = {
            'level': 'DEBUG',
            'class': 'logging.handlers.TimedRotatingFileHandler',
            'filename': os.path.join(
                log_directory, settings.basename + '.dicemind.log'),
            'when': 'midnight',
            'formatter': 'dicemind',
        }

    return logging_config


def setup_logging(settings):
    """Set up logging based on the configuration ``settings``.

    :param settings: configuration settings object
    :type settings: :class:`dicemind.config.Config`

    Logs go to stderr, and also to a daily rotated file when
    :attr:`core.logdir <dicemind.config.core_section.CoreSection.logdir>` is
    set.
    """
    dictConfig(get_logging_config(settings))
