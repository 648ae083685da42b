"""
bme280.py

Provides a sensor driver for the Bosch BME280 temperature, pressure and
humidity sensor on the I2C bus.
"""

import board
import busio
from adafruit_bme280 import basic as adafruit_bme280

from environment_exporter.exceptions.sensors import (
    SensorInitError,
    SensorReadError,
    SensorStopError,
    SensorValueError,
)
from environment_exporter.inputs.sensors.base import SensorReader
from environment_exporter.inputs.sensors.constants import (
    BME280_I2C_ADDRESSES,
    DEFAULT_BME280_ADDRESS,
    PASCALS_PER_HECTOPASCAL,
)
from environment_exporter.inputs.sensors.reading import Reading


class BME280InitError(SensorInitError):
    """
    Raised when the BME280 sensor cannot be found or initialised.
    """
    pass

class BME280ValueError(SensorValueError):
    """
    Raised when the BME280 sensor is given an invalid I2C address.
    """
    pass

class BME280ReadError(SensorReadError):
    """
    Raised when reading data from the BME280 sensor fails.
    """
    pass

class BME280StopError(SensorStopError):
    """
    Raised when the I2C bus used by the BME280 cannot be released.
    """
    pass


def parse_i2c_address(value) -> int:
    """
    Accept an int or a string in any base Python understands ("0x76", "118").
    """
    if isinstance(value, str):
        return int(value.strip(), 0)
    return int(value)


class BME280Sensor(SensorReader):
    """
    Sensor driver for the BME280 environmental sensor.

    Opens the board's default I2C bus via Blinka and probes the device in the
    constructor, so a missing or miswired sensor fails at startup rather than
    on the first scrape. Each call to sense() reads all three quantities and
    returns them as one Reading.
    """
    # Factory uses these for validation + filtering.
    REQUIRED_KWARGS = ["id"]
    ACCEPTED_KWARGS = ["id", "address"]
    COERCERS = {"address": parse_i2c_address}

    def __init__(self, *, id: str | None = None, address: int = DEFAULT_BME280_ADDRESS):
        self.sensor = None
        self._i2c = None
        self.sensor_name = "BME280"

        self.sensor_id: str | None = id
        self.address: int = address
        self._check_address()

        self._create_sensor()

    # --- Properties ---------------------------------------------------------

    @property
    def name(self) -> str:
        return self.sensor_name

    # --- Internals ----------------------------------------------------------

    def _check_address(self) -> None:
        """
        Validate the configured I2C address against the two the chip supports.
        """
        if not isinstance(self.address, int) or isinstance(self.address, bool):
            raise BME280ValueError(
                f"Invalid address type: expected int, got {type(self.address).__name__}"
            )
        if self.address not in BME280_I2C_ADDRESSES:
            valid = ", ".join(f"0x{a:02X}" for a in BME280_I2C_ADDRESSES)
            raise BME280ValueError(
                f"Address 0x{self.address:02X} is not a BME280 address (expected one of {valid})"
            )

    def _create_sensor(self):
        """
        Open the I2C bus and probe the BME280 at the configured address.
        """
        try:
            self._i2c = busio.I2C(board.SCL, board.SDA)
            self.sensor = adafruit_bme280.Adafruit_BME280_I2C(self._i2c, address=self.address)
        except Exception as e:
            self._i2c = None
            self.sensor = None
            raise BME280InitError(
                f"Failed to create BME280 sensor at 0x{self.address:02X}: {e}"
            ) from e
        return self.sensor

    # --- Public API ---------------------------------------------------------

    def sense(self) -> Reading:
        """
        Read temperature, pressure and humidity from the BME280.

        Returns:
            Reading: temperature in C, pressure in Pa, humidity in %RH.
        """
        if self.sensor is None:
            raise BME280ReadError("BME280 sensor is closed")

        try:
            temperature = self.sensor.temperature
            pressure = self.sensor.pressure
            humidity = self.sensor.humidity
        except Exception as e:
            raise BME280ReadError(f"Failed to read BME280 sensor: {e}") from e

        if temperature is None:
            raise BME280ReadError("Temperature reading returned None")
        if pressure is None:
            raise BME280ReadError("Pressure reading returned None")
        if humidity is None:
            raise BME280ReadError("Humidity reading returned None")

        return Reading(
            temperature=float(temperature),
            pressure=float(pressure) * PASCALS_PER_HECTOPASCAL,
            humidity=float(humidity),
        )

    def close(self) -> None:
        """
        Release the I2C bus. Safe to call more than once.
        """
        if self._i2c is None:
            return
        i2c = self._i2c
        self._i2c = None
        self.sensor = None
        try:
            i2c.deinit()
        except Exception as e:
            raise BME280StopError(f"Failed to release I2C bus for BME280: {e}") from e
