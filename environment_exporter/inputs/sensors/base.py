"""
base.py

Defines the SensorReader abstract class, which all sensor drivers must implement.
"""


from abc import ABC, abstractmethod

from environment_exporter.inputs.sensors.reading import Reading


class SensorReader(ABC):
    """
    Abstract base class for environmental sensor drivers.

    Concrete subclasses must implement:
      - name:    human-readable sensor model identifier
      - sense(): perform one blocking hardware transaction and return a Reading

    The device handle is opened by the driver's constructor and released by
    close(). Whoever builds the driver owns that lifecycle; the collection
    bridge only calls sense().
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name identifying the sensor model."""

    @abstractmethod
    def sense(self) -> Reading:
        """
        Read temperature, pressure and humidity in one transaction.

        Raises:
            SensorReadError: The bus transaction failed. Not retried.
        """

    def close(self) -> None:
        """Release the device handle. Drivers holding hardware override this."""
