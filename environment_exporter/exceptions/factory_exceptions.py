"""
factory_exceptions.py

Errors raised while turning the "sensor" config section into a driver. They
are ConfigurationErrors, so the bootstrap reports them alongside other config
problems and exits with the configuration status code.
"""

from typing import Optional

from .config_exceptions import ConfigurationError


class FactoryError(ConfigurationError):
    """
    The sensor section could not be turned into a driver.

    The message is prefixed with whatever the section said about itself
    (type and id) so the startup log points at the offending entry.
    """
    def __init__(
        self,
        message: str,
        *,
        sensor_type: Optional[str] = None,
        sensor_id: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.sensor_type = sensor_type
        self.sensor_id = sensor_id
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        message = super().__str__()
        section = " ".join(
            f"{key}={value}"
            for key, value in (("type", self.sensor_type), ("id", self.sensor_id))
            if value
        )
        return f"sensor section [{section}]: {message}" if section else message


class UnknownSensorTypeError(FactoryError):
    """No driver is registered under the configured sensor type."""
    def __init__(
        self,
        unknown_type: str,
        known_types: list[str],
        *,
        sensor_id: Optional[str] = None,
    ) -> None:
        self.known_types = sorted(known_types)
        available = ", ".join(self.known_types) or "none"
        super().__init__(
            f"no driver registered for '{unknown_type}' (available: {available})",
            sensor_type=unknown_type,
            sensor_id=sensor_id,
        )


class InvalidSensorConfigError(FactoryError):
    """The sensor section is malformed or the driver rejected its values."""
