from __future__ import annotations

from dicemind.config.types import (
    ChoiceAttribute,
    FilenameAttribute,
    StaticSection,
    ValidatedAttribute,
)


LOGGING_LEVELS = ['CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG']
"""Valid values of :attr:`CoreSection.logging_level`."""


class CoreSection(StaticSection):
    """The config section used for configuring dicemind itself.

    .. code-block:: ini

        [core]
        logging_level = DEBUG
        logdir = logs

    """

    logdir = FilenameAttribute('logdir', directory=True, default=None)
    """Directory in which to place logs.

    :default: no log file

    If the given value is not an absolute path, it will be interpreted relative
    to the directory containing the config file. When it is not set, logs are
    only written to the console.
    """

    logging_datefmt = ValidatedAttribute('logging_datefmt')
    """The format string to use for timestamps in logs.

    If not set, the ``datefmt`` argument is not provided, and :mod:`logging`
    will use the Python default.
    """

    logging_format = ValidatedAttribute(
        'logging_format',
        default='[%(asctime)s] %(name)-20s %(levelname)-8s - %(message)s')
    """The logging format string to use for logs.

    :default: ``[%(asctime)s] %(name)-20s %(levelname)-8s - %(message)s``

    The default log line format will output the timestamp, the package that
    generated the log line, the log level of the line, and (finally) the actual
    message. For example::

        [2026-10-18 12:47:44,272] dicemind.evaluator   DEBUG    - Evaluated '2d6' to 7

    .. seealso::

        Python's logging format documentation: :ref:`logrecord-attributes`
    """

    logging_level = ChoiceAttribute('logging_level',
                                    LOGGING_LEVELS,
                                    'WARNING')
    """The lowest severity of logs to display.

    :default: ``WARNING``

    Valid values sorted by increasing verbosity:

    * ``CRITICAL``
    * ``ERROR``
    * ``WARNING``
    * ``INFO``
    * ``DEBUG``

    The evaluation pipeline itself only logs at ``DEBUG`` level.
    """
