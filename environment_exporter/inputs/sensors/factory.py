"""
factory.py

Provides the SensorFactory, which constructs a sensor driver from the
"sensor" section of the configuration. Drivers declare which keyword
arguments they accept and how to coerce them; the factory validates the
config against that metadata so the collection bridge never sees driver
construction details.
"""


from environment_exporter.inputs.sensors import bme280
from environment_exporter.inputs.sensors.base import SensorReader
from environment_exporter.exceptions import (
    InvalidSensorConfigError,
    SensorInitError,
    UnknownSensorTypeError,
)

# Set up logging
from environment_exporter import PACKAGE_LOGGER_NAME
import logging
logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{__name__.split('.')[-1]}")


class SensorFactory:
    """
    Construct sensor drivers from configuration.

    The factory maintains a registry mapping sensor type strings to driver
    classes, validates configuration data, and instantiates drivers with only
    the parameters they accept.
    """
    def __init__(self, registry: dict[str, type[SensorReader]] | None = None):
        if registry is None:
            self._registry = {
                "bme280": bme280.BME280Sensor,
            }
        else:
            self._registry = dict(registry)

    @property
    def known_types(self) -> list[str]:
        return sorted(self._registry)

    def register(self, sensor_type: str, driver_class: type[SensorReader]):
        """
        Register or override a sensor driver class for a given sensor type.

        Args:
            sensor_type (str): Sensor type identifier used in configuration.
            driver_class (type[SensorReader]): Driver class implementing the sensor.
        """
        if not isinstance(sensor_type, str):
            raise InvalidSensorConfigError("sensor_type must be a string")

        sensor_type = sensor_type.strip().lower()
        if not sensor_type:
            raise InvalidSensorConfigError("sensor_type cannot be empty or whitespace")

        if not isinstance(driver_class, type) or not issubclass(driver_class, SensorReader):
            raise InvalidSensorConfigError("driver_class must be a subclass of SensorReader")

        old_driver = self._registry.get(sensor_type)
        if old_driver is not None:
            logger.warning(
                f"Overriding driver for '{sensor_type}': "
                f"{old_driver.__name__} -> {driver_class.__name__}"
            )

        self._registry[sensor_type] = driver_class

    def build(self, sensor_config) -> SensorReader:
        """
        Build a sensor driver from a sensor configuration dictionary.

        The configuration is validated, the driver class is resolved from the
        registry, and the driver is instantiated with accepted and coerced
        parameters.

        Raises:
            InvalidSensorConfigError: The configuration is malformed.
            UnknownSensorTypeError: No driver is registered for the type.
            SensorInitError: The driver could not open or probe the device.

        Returns:
            SensorReader: A constructed driver with its device handle open.
        """
        if not isinstance(sensor_config, dict):
            raise InvalidSensorConfigError("Sensor configuration must be a mapping")

        sensor_type = sensor_config.get("type")
        if not isinstance(sensor_type, str) or not sensor_type.strip():
            raise InvalidSensorConfigError("Missing or invalid 'type' in sensor configuration")
        sensor_type = sensor_type.strip().lower()
        sensor_id = sensor_config.get("id")

        driver_class = self._registry.get(sensor_type)
        if driver_class is None:
            raise UnknownSensorTypeError(
                unknown_type=sensor_type,
                known_types=list(self._registry.keys()),
                sensor_id=sensor_id,
            )

        required_kwargs = getattr(driver_class, "REQUIRED_KWARGS", None) or []
        accepted_kwargs = getattr(driver_class, "ACCEPTED_KWARGS", set())
        coercers = getattr(driver_class, "COERCERS", {})

        not_accepted = set(required_kwargs) - set(accepted_kwargs)
        if not_accepted:
            raise InvalidSensorConfigError(
                f"Driver {driver_class.__name__} misconfigured: REQUIRED_KWARGS {sorted(required_kwargs)} "
                f"must be included in ACCEPTED_KWARGS (missing: {sorted(not_accepted)})",
                sensor_type=sensor_type,
                sensor_id=sensor_id,
            )

        filtered_kwargs: dict[str, object] = {}
        for key, value in sensor_config.items():
            if key in accepted_kwargs:
                filtered_kwargs[key] = value
            elif key != "type":
                logger.debug(f"Ignoring unsupported key '{key}' for {driver_class.__name__}")

        for field_name, cast in coercers.items():
            if field_name in filtered_kwargs:
                try:
                    filtered_kwargs[field_name] = cast(filtered_kwargs[field_name])
                except Exception as e:
                    raise InvalidSensorConfigError(
                        f"Invalid value for '{field_name}' in {driver_class.__name__}: "
                        f"{filtered_kwargs[field_name]!r}",
                        sensor_type=sensor_type,
                        sensor_id=sensor_id,
                        cause=e,
                    ) from e

        missing = sorted(
            key for key in required_kwargs
            if key not in filtered_kwargs or filtered_kwargs[key] in (None, "", [])
        )
        if missing:
            raise InvalidSensorConfigError(
                f"{driver_class.__name__} requires fields: {sorted(required_kwargs)}, missing: {missing}",
                sensor_type=sensor_type,
                sensor_id=sensor_id,
            )

        try:
            driver = driver_class(**filtered_kwargs)
        except SensorInitError:
            raise
        except Exception as e:
            raise InvalidSensorConfigError(
                f"Failed to instantiate {driver_class.__name__}: {e}",
                sensor_type=sensor_type,
                sensor_id=sensor_id,
                cause=e,
            ) from e

        logger.info(f"Built {driver.name} sensor (type={sensor_type}, id={sensor_id})")
        return driver
