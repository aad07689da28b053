from __future__ import annotations

import inspect
import logging
import os
import sys

from dicemind import config

# Allow clean import *
__all__ = [
    'enumerate_configs',
    'find_config',
    'add_common_arguments',
    'load_settings',
    'stderr',
    'red',
]

LOGGER = logging.getLogger(__name__)

RESET = '\033[0m'
RED = '\033[31m'

CONFIG_ENV = 'DICEMIND_CONFIG'
"""Environment variable naming the configuration to use by default."""


def _colored(text, color, reset=True):
    text = color + text
    if reset:
        return text + RESET
    return text


def red(text, reset=True):
    """Add ANSI escape sequences to make the text red in term

    :param str text: text to colorized in red
    :param bool reset: if the text color must be reset after (default ``True``)
    :return: text with ANSI escape sequences for red color
    :rtype: str
    """
    return _colored(text, RED, reset)


def stderr(string):
    """Print the given ``string`` to stderr.

    :param str string: the string to output
    """
    print(string, file=sys.stderr)


def enumerate_configs(config_dir, extension='.cfg'):
    """List configuration files from ``config_dir`` with ``extension``

    :param str config_dir: path to the configuration directory
    :param str extension: configuration file's extension (default to ``.cfg``)
    :return: a list of configuration filenames found in ``config_dir`` with
             the correct ``extension``
    :rtype: list

    Example::

        >>> from dicemind import cli, config
        >>> os.listdir(config.DEFAULT_HOMEDIR)
        ['default.cfg', 'extra.ini', 'gurps.cfg', 'README']
        >>> list(cli.enumerate_configs(config.DEFAULT_HOMEDIR))
        ['default.cfg', 'gurps.cfg']
        >>> list(cli.enumerate_configs(config.DEFAULT_HOMEDIR, '.ini'))
        ['extra.ini']

    """
    if not os.path.isdir(config_dir):
        return

    for item in os.listdir(config_dir):
        if item.endswith(extension):
            yield item


def find_config(config_dir, name, extension='.cfg'):
    """Build the absolute path for the given configuration file ``name``

    :param str config_dir: path to the configuration directory
    :param str name: configuration file ``name``
    :param str extension: configuration file's extension (default to ``.cfg``)
    :return: the path of the configuration file, either in the current
             directory or from the ``config_dir`` directory

    This function tries different locations:

    * the current directory
    * the ``config_dir`` directory with the ``extension`` suffix
    * the ``config_dir`` directory without a suffix

    Example::

        >>> from dicemind.cli import utils
        >>> from dicemind import config
        >>> os.listdir()
        ['local.cfg', 'extra.ini']
        >>> os.listdir(config.DEFAULT_HOMEDIR)
        ['default.cfg', 'extra.ini', 'gurps.cfg', 'README']
        >>> utils.find_config(config.DEFAULT_HOMEDIR, 'local.cfg')
        '/home/username/local.cfg'
        >>> utils.find_config(config.DEFAULT_HOMEDIR, 'gurps')
        '/home/username/.dicemind/gurps.cfg'
        >>> utils.find_config(config.DEFAULT_HOMEDIR, 'extra', '.ini')
        '/home/username/.dicemind/extra.ini'

    """
    if os.path.isfile(name):
        return os.path.abspath(name)
    name_ext = name + extension
    for filename in enumerate_configs(config_dir, extension):
        if name_ext == filename:
            return os.path.join(config_dir, name_ext)

    return os.path.join(config_dir, name)


def add_common_arguments(parser):
    """Add common and configuration-related arguments to a ``parser``.

    :param parser: Argument parser (or subparser)
    :type parser: argparse.ArgumentParser

    This functions adds the common arguments for dicemind's command line
    tools:

    * ``-c``/``--config``: the name of the dicemind config, or its path
    * ``--config-dir``: the directory to scan for config files
    * ``--seed``: the seed of the random source
    * ``--trace``: show every die of every roll

    Then, when the parser parses the command line arguments, it will expose
    ``config`` and ``configdir`` options that can be used to find and load
    dicemind's settings with :func:`load_settings`.
    """
    parser.add_argument(
        '-c', '--config',
        default=None,
        metavar='filename',
        dest='config',
        help=inspect.cleandoc("""
            Use a specific configuration file.
            A config name can be given and the configuration file will be
            found in dicemind's homedir (defaults to
            ``~/.dicemind/default.cfg``).
            A pathname can be provided instead to use an arbitrary location.
        """))
    parser.add_argument(
        '--config-dir',
        default=config.DEFAULT_HOMEDIR,
        dest='configdir',
        help='Look for configuration files in this directory.')
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        dest='seed',
        help='Seed the random source, to get reproducible rolls.')
    parser.add_argument(
        '--trace',
        action='store_true',
        default=False,
        dest='trace',
        help='Show every die of every roll.')


def load_settings(options):
    """Load dicemind's settings using the command line's ``options``.

    :param options: parsed arguments
    :return: dicemind configuration
    :rtype: :class:`dicemind.config.Config`
    :raise dicemind.config.ConfigurationNotFound: raised when a configuration
                                                  file was explicitly
                                                  requested but is not found
    :raise ValueError: raised when the configuration is invalid

    This function loads dicemind's settings from one of these sources:

    * value of ``options.config``, if given,
    * ``DICEMIND_CONFIG`` environment variable, if no option is given,
    * otherwise the ``default`` configuration is loaded,

    then loads the settings and returns it as a
    :class:`~dicemind.config.Config` object.

    Every setting has a default value, so a missing ``default`` configuration
    is not an error.

    .. note::

        This function expects that ``options`` exposes two attributes:
        ``config`` and ``configdir``.

        The :func:`dicemind.cli.utils.add_common_arguments` function should be
        used to add these options to the argument parser.

    """
    # Default if no options.config or no env var or if they are empty
    name = None
    if options.config:
        name = options.config
    elif os.environ.get(CONFIG_ENV):
        name = os.environ[CONFIG_ENV]

    filename = find_config(options.configdir, name or 'default')

    if not os.path.isfile(filename):
        if name is not None:
            raise config.ConfigurationNotFound(filename=filename)
        LOGGER.debug('No configuration file at %s, using defaults', filename)

    return config.Config(filename)
