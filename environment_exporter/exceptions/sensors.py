"""
sensors.py

Shared base exception classes for sensor drivers.

Each driver module (e.g. bme280) defines its own exception names
(BME280ReadError, ...) as thin subclasses of these bases. The collection
bridge only ever catches the bases:

    # Driver-specific (precise):
    except BME280ReadError: ...

    # Any sensor (broad):
    except SensorReadError: ...

SensorInitError is a startup failure (bus open, device probe) and is fatal.
SensorReadError is a per-scrape transport failure (bus timeout, NACK,
malformed data, device not ready) and is not.
"""


class SensorInitError(Exception):
    """Raised when a sensor cannot be opened or probed."""


class SensorReadError(Exception):
    """Raised when a single sense transaction fails."""


class SensorTimeoutError(SensorReadError):
    """Raised when a sense transaction does not finish before its deadline."""


class SensorValueError(Exception):
    """Raised when a sensor is given an invalid configuration value."""


class SensorStopError(Exception):
    """Raised when a sensor cannot be cleanly closed or released."""
