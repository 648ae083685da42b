from .config_exceptions import (
    ConfigurationError,
    InvalidConfigValueError,
    MissingConfigKeyError,
    ConfigFileNotFoundError,
)
from .factory_exceptions import FactoryError, UnknownSensorTypeError, InvalidSensorConfigError
from .sensors import (
    SensorInitError,
    SensorReadError,
    SensorTimeoutError,
    SensorValueError,
    SensorStopError,
)
from .collection import CollectionFailure

__all__ = [
    "ConfigurationError",
    "InvalidConfigValueError",
    "MissingConfigKeyError",
    "ConfigFileNotFoundError",
    "FactoryError",
    "UnknownSensorTypeError",
    "InvalidSensorConfigError",
    "SensorInitError",
    "SensorReadError",
    "SensorTimeoutError",
    "SensorValueError",
    "SensorStopError",
    "CollectionFailure",
]
