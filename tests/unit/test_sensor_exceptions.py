"""
test_sensor_exceptions.py

Verify the sensor and collection exception hierarchy.

Driver-specific exceptions must subclass the shared bases so the collection
bridge can catch any driver's read failure as SensorReadError, and startup
can tell initialisation failures apart from per-scrape failures.
"""

import pytest
from environment_exporter.exceptions import (
    CollectionFailure,
    SensorInitError,
    SensorReadError,
    SensorStopError,
    SensorTimeoutError,
    SensorValueError,
)


# ── Base classes ──────────────────────────────────────────────────────────────

@pytest.mark.parametrize("exc", [SensorInitError, SensorReadError, SensorValueError, SensorStopError])
def test_sensor_bases_are_exceptions(exc):
    assert issubclass(exc, Exception)


def test_timeout_is_a_read_error():
    assert issubclass(SensorTimeoutError, SensorReadError)


def test_init_error_is_not_a_read_error():
    assert not issubclass(SensorInitError, SensorReadError)


# ── CollectionFailure ─────────────────────────────────────────────────────────

def test_collection_failure_keeps_cause():
    cause = SensorReadError("bus timeout")
    failure = CollectionFailure(cause)
    assert failure.cause is cause
    assert failure.__cause__ is cause
    assert "bus timeout" in str(failure)


def test_collection_failure_timed_out_flag():
    assert CollectionFailure(SensorTimeoutError("late")).timed_out
    assert not CollectionFailure(SensorReadError("NACK")).timed_out


def test_collection_failure_is_not_a_sensor_error():
    assert not issubclass(CollectionFailure, SensorReadError)
