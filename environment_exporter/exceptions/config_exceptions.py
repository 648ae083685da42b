"""
config_exceptions.py

Exceptions raised while loading and validating the exporter configuration.

Everything derives from ConfigurationError, so the bootstrap can treat any
of them as a fatal startup problem with a single except clause:

    except ConfigurationError: ...
"""


class ConfigurationError(Exception):
    """Base class for all configuration-related errors."""


class InvalidConfigValueError(ConfigurationError, ValueError):
    """Raised when a config value (file or environment override) is invalid."""


class MissingConfigKeyError(ConfigurationError, KeyError):
    """Raised when a required key is absent from the config file."""


class ConfigFileNotFoundError(ConfigurationError, FileNotFoundError):
    """Raised when CONFIG_PATH points at a file that does not exist."""
