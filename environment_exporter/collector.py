"""
collector.py

Provides the CollectionBridge class, a prometheus_client custom collector that
reads the sensor once per scrape and turns the Reading into three gauge
samples sharing one capture timestamp.

Classes:
    CollectionBridge

Usage:
    bridge = CollectionBridge(sensor, prefix="sensors_1")
    registry.register(bridge)
"""

import logging
import threading
import time
from typing import Callable, Optional

from prometheus_client.core import GaugeMetricFamily

from environment_exporter import PACKAGE_LOGGER_NAME
from environment_exporter.exceptions import (
    CollectionFailure,
    SensorReadError,
    SensorTimeoutError,
)
from environment_exporter.inputs.sensors.base import SensorReader
from environment_exporter.inputs.sensors.reading import Reading
from environment_exporter.metrics.descriptors import MetricDescriptor, Sample, build_descriptors

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.collector")


class CollectionBridge:
    """
    Pull collector bridging one SensorReader to a Prometheus registry.

    Every collect performs its own sense transaction; readings are never
    cached or shared between scrapes. Sense calls are serialised with a lock
    because I2C handles do not support concurrent transactions. The lock is
    released before samples are built.

    The bridge holds the sensor but does not own it: opening and closing the
    device is the bootstrap's job.

    Args:
        sensor: Driver used for every sense transaction.
        prefix: Metric name prefix, e.g. "sensors_1".
        sense_timeout: Optional deadline in seconds for one sense, including
            time spent waiting for a concurrent scrape to release the bus.
            None blocks until the transaction finishes.
        clock: Wall-clock source for capture timestamps (Unix seconds).
    """

    def __init__(
        self,
        sensor: SensorReader,
        *,
        prefix: str = "sensors_1",
        sense_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if sense_timeout is not None and sense_timeout <= 0:
            raise ValueError("sense_timeout must be a positive number of seconds")

        self._sensor = sensor
        self._descriptors = build_descriptors(prefix)
        self._sense_timeout = sense_timeout
        self._clock = clock
        self._lock = threading.Lock()
        self._stalled_transactions = 0

    @property
    def descriptors(self) -> tuple[MetricDescriptor, ...]:
        return self._descriptors

    @property
    def stalled_transactions(self) -> int:
        """
        Number of sense transactions abandoned at their deadline. Non-zero
        means the device may be left mid-transaction and need reinitialising.
        """
        return self._stalled_transactions

    # --- prometheus_client collector protocol ------------------------------

    def describe(self) -> list[GaugeMetricFamily]:
        """
        Return the declared metric families without touching the sensor.
        """
        return [GaugeMetricFamily(d.name, d.documentation, labels=list(d.labels)) for d in self._descriptors]

    def collect(self) -> list[GaugeMetricFamily]:
        """
        Sense once and return one gauge family per quantity.

        Raises:
            CollectionFailure: The sensor read failed; nothing was produced.
        """
        families = []
        for sample in self.collect_samples():
            family = GaugeMetricFamily(
                sample.descriptor.name,
                sample.descriptor.documentation,
                labels=list(sample.descriptor.labels),
            )
            family.add_metric([], sample.value, timestamp=sample.timestamp)
            families.append(family)
        return families

    # --- Public API ---------------------------------------------------------

    def collect_samples(self) -> list[Sample]:
        """
        Sense once and convert the Reading into three timestamped samples.

        Returns:
            list[Sample]: Exactly one sample per descriptor, all sharing the
            timestamp taken when sense() returned.

        Raises:
            CollectionFailure: Wraps the SensorReadError; no samples exist.
        """
        try:
            reading = self._sense()
        except SensorReadError as e:
            logger.debug(f"Sense failed on {self._sensor.name}: {e}")
            raise CollectionFailure(e) from e
        timestamp = self._clock()

        return [
            Sample(descriptor=d, value=float(getattr(reading, d.field)), timestamp=timestamp)
            for d in self._descriptors
        ]

    # --- Internals ----------------------------------------------------------

    def _sense(self) -> Reading:
        if self._sense_timeout is None:
            with self._lock:
                return self._sensor.sense()
        return self._sense_with_deadline(self._sense_timeout)

    def _sense_with_deadline(self, timeout: float) -> Reading:
        """
        Run sense() on a worker thread and stop waiting after ``timeout``.

        The bus transaction itself cannot be cancelled. On expiry the worker is
        left to finish on its own and releases the lock when it does; until
        then later scrapes time out waiting for the lock.
        """
        deadline = time.monotonic() + timeout
        if not self._lock.acquire(timeout=timeout):
            raise SensorTimeoutError(
                f"{self._sensor.name} bus still busy after {timeout}s"
            )

        outcome: dict = {}

        def _run() -> None:
            try:
                outcome["reading"] = self._sensor.sense()
            except BaseException as e:
                outcome["error"] = e
            finally:
                self._lock.release()

        worker = threading.Thread(target=_run, name="sense", daemon=True)
        worker.start()
        worker.join(max(0.0, deadline - time.monotonic()))

        if worker.is_alive():
            self._stalled_transactions += 1
            logger.error(
                f"{self._sensor.name} sense exceeded {timeout}s and was abandoned "
                f"({self._stalled_transactions} stalled so far); the device may need reinitialising"
            )
            raise SensorTimeoutError(f"{self._sensor.name} sense timed out after {timeout}s")

        if "error" in outcome:
            raise outcome["error"]
        return outcome["reading"]
