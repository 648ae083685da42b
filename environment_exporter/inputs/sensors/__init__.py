from .base import SensorReader
from .reading import Reading

__all__ = ["SensorReader", "Reading"]
