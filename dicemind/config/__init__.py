"""dicemind's configuration module.

The :class:`~dicemind.config.Config` object provides an interface to access
dicemind's configuration file. It exposes the configuration's sections through
its attributes as objects, which in turn expose their directives through
*their* attributes.

For example, this is how to access ``roller.percentile_sides`` on a
:class:`Config` object::

    >>> from dicemind import config
    >>> settings = config.Config('/home/user/.dicemind/default.cfg')
    >>> settings.roller.percentile_sides
    100

The configuration file being:

.. code-block:: ini

    [core]
    logging_level = INFO

    [roller]
    percentile_sides = 100
    reroll_default_cap = 2

The ``[core]`` section is represented by the
:class:`~dicemind.config.core_section.CoreSection` class and the ``[roller]``
section by :class:`~dicemind.config.roller_section.RollerSection`; both are
subclasses of :class:`~dicemind.config.types.StaticSection` and are added
when the :class:`Config` object is instantiated.
"""
from __future__ import annotations

import configparser
import os

from . import core_section, roller_section, types


__all__ = [
    'core_section',
    'roller_section',
    'types',
    'DEFAULT_HOMEDIR',
    'ConfigurationError',
    'ConfigurationNotFound',
    'Config',
]

DEFAULT_HOMEDIR = os.path.join(os.path.expanduser('~'), '.dicemind')


class ConfigurationError(Exception):
    """Exception type for configuration errors.

    :param str value: a description of the error that has occurred
    """
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return 'ConfigurationError: %s' % self.value


class ConfigurationNotFound(ConfigurationError):
    """Exception type for use when the configuration file cannot be found.

    :param str filename: file path that could not be found
    """
    def __init__(self, filename):
        super().__init__(None)
        self.filename = filename
        """Path to the configuration file that could not be found."""

    def __str__(self):
        return 'Unable to find the configuration file %s' % self.filename


class Config:
    """dicemind's configuration.

    :param str filename: the configuration file to load and use to populate
                         this ``Config`` instance
    :param bool validate: if ``True``, validate values in the ``[core]`` and
                          ``[roller]`` sections when they are loaded
                          (optional; ``True`` by default)
    :raise ValueError: if ``validate`` is ``True`` and a value is invalid

    The file does not need to exist: every option has a default value.
    """
    def __init__(self, filename, validate=True):
        self.filename = filename
        """The config object's associated file."""
        basename, _ = os.path.splitext(os.path.basename(filename))
        self.basename = basename
        """The config's base filename, i.e. the filename without the extension.

        If the filename is ``tabletop.config.cfg``, then the ``basename`` will
        be ``tabletop.config``.
        """
        self.parser = configparser.RawConfigParser(allow_no_value=True)
        """The configuration parser object that does the heavy lifting.

        .. seealso::

            Python's built-in :mod:`configparser` module and its
            :class:`~configparser.RawConfigParser` class.

        """
        self.parser.read(self.filename)
        self.define_section('core', core_section.CoreSection,
                            validate=validate)
        self.define_section('roller', roller_section.RollerSection,
                            validate=validate)
        self.get = self.parser.get
        """Shortcut to :meth:`parser.get <configparser.ConfigParser.get>`."""

    @property
    def homedir(self):
        """The config file's home directory.

        This is the directory portion of the :class:`Config`'s
        :attr:`filename`.
        """
        return os.path.dirname(os.path.abspath(self.filename))

    def define_section(self, name, cls_, validate=True):
        """Define the available settings in a section.

        :param str name: name of the new section
        :param cls\\_: :term:`class` defining the settings within the section
        :type cls\\_: subclass of :class:`~.types.StaticSection`
        :param bool validate: whether to validate the section's values
                              (optional; defaults to ``True``)
        :raise ValueError: if the section ``name`` has been defined already with
                           a different ``cls_``
        """
        if not issubclass(cls_, types.StaticSection):
            raise ValueError("Class must be a subclass of StaticSection.")
        current = self.__dict__.get(name)
        if current is not None and not isinstance(current, cls_):
            raise ValueError(
                "Can not re-define class for section from {} to {}.".format(
                    type(current), cls_)
            )
        setattr(self, name, cls_(self, name, validate=validate))

    def evaluation_options(self, **overrides):
        """Get the evaluation options defined by the ``[roller]`` section.

        :param overrides: options to change, such as ``trace_enabled=True``
        :rtype: :class:`~dicemind.options.EvaluationOptions`
        """
        options = self.roller.evaluation_options()
        if overrides:
            options = options.replace(**overrides)
        return options

    def __contains__(self, name):
        return name in self.parser.sections()
