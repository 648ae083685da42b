"""
test_abc_contracts.py

Tests that the SensorReader ABC contract is enforced at instantiation time,
i.e. omitting any required interface element raises TypeError before the
object is created.
"""

import pytest

from environment_exporter.inputs.sensors.base import SensorReader
from environment_exporter.inputs.sensors.reading import Reading


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_sensor_class(*, name=True, sense=True):
    """Return a concrete SensorReader subclass, omitting members as requested."""
    attrs = {}
    if name:
        attrs["name"] = property(lambda self: "test_sensor")
    if sense:
        attrs["sense"] = lambda self: Reading(temperature=20.0, pressure=100000.0, humidity=50.0)
    return type("ConcreteTestSensor", (SensorReader,), attrs)


# ---------------------------------------------------------------------------
# SensorReader contract tests
# ---------------------------------------------------------------------------

class TestSensorReaderContracts:
    """Verify SensorReader raises TypeError when a required interface element is missing."""

    def test_complete_implementation_instantiates(self):
        cls = _make_sensor_class()
        cls()  # must not raise

    def test_missing_sense_raises(self):
        cls = _make_sensor_class(sense=False)
        with pytest.raises(TypeError):
            cls()

    def test_missing_name_raises(self):
        cls = _make_sensor_class(name=False)
        with pytest.raises(TypeError):
            cls()

    def test_close_defaults_to_noop(self):
        sensor = _make_sensor_class()()
        assert sensor.close() is None


class TestReading:
    """Reading is an immutable value."""

    def test_reading_is_frozen(self):
        reading = Reading(temperature=20.0, pressure=100000.0, humidity=50.0)
        with pytest.raises(AttributeError):
            reading.temperature = 21.0

    def test_reading_equality(self):
        assert Reading(1.0, 2.0, 3.0) == Reading(temperature=1.0, pressure=2.0, humidity=3.0)
