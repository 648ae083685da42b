"""
server.py

Embeds collectors in a Prometheus HTTP endpoint. Owns an explicit
CollectorRegistry (no process-wide default registry) and decides what a
scrape looks like when a collector reports a CollectionFailure.
"""

import enum
import logging
import threading
from typing import Any, Optional

from prometheus_client import CollectorRegistry, start_http_server

from environment_exporter import PACKAGE_LOGGER_NAME
from environment_exporter.exceptions import CollectionFailure

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.server")


class FailurePolicy(str, enum.Enum):
    """
    What a scrape returns when the sensor read fails.

    FAIL: the error propagates and the scrape answers HTTP 500, so Prometheus
          records up == 0 for the target.
    SKIP: the sensor's series are left out of that scrape and a warning is
          logged; the rest of the registry is still served.
    """
    FAIL = "fail"
    SKIP = "skip"


class PolicyCollector:
    """
    Wrap a collector and apply a FailurePolicy to its CollectionFailures.

    Partial output is impossible either way: the wrapped collector has
    produced all of its families before anything is handed on.
    """

    def __init__(self, collector: Any, policy: FailurePolicy) -> None:
        self._collector = collector
        self._policy = FailurePolicy(policy)

    @property
    def collector(self) -> Any:
        return self._collector

    @property
    def policy(self) -> FailurePolicy:
        return self._policy

    def describe(self):
        return self._collector.describe()

    def collect(self):
        try:
            return list(self._collector.collect())
        except CollectionFailure as e:
            if self._policy is FailurePolicy.FAIL:
                logger.error(f"Scrape failed: {e}")
                raise
            if e.timed_out:
                logger.error(f"Scrape degraded, sensor timed out: {e}")
            else:
                logger.warning(f"Scrape degraded, sensor series omitted: {e}")
            return []


class MetricsServer:
    """
    Serve a CollectorRegistry over HTTP with prometheus_client.

    Args:
        port: TCP port to listen on; 0 picks a free port.
        addr: Interface address to bind.
        failure_policy: Applied to every collector registered here.
        registry: Registry to serve; a fresh one is created if omitted.
    """

    def __init__(
        self,
        port: int,
        addr: str = "0.0.0.0",
        failure_policy: FailurePolicy = FailurePolicy.FAIL,
        registry: Optional[CollectorRegistry] = None,
    ) -> None:
        self._port = port
        self._addr = addr
        self._failure_policy = FailurePolicy(failure_policy)
        self._registry = registry if registry is not None else CollectorRegistry()
        self._httpd = None
        self._thread = None
        self._stopped = threading.Event()

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    @property
    def port(self) -> Optional[int]:
        """Bound port once started, else None."""
        if self._httpd is None:
            return None
        return self._httpd.server_address[1]

    def register(self, collector: Any) -> PolicyCollector:
        """
        Register a collector under this server's failure policy.

        Registration calls the collector's describe(), never collect().
        """
        wrapped = PolicyCollector(collector, self._failure_policy)
        self._registry.register(wrapped)
        logger.info(
            f"Registered {type(collector).__name__} (failure_policy={self._failure_policy.value})"
        )
        return wrapped

    def start(self) -> int:
        """
        Start the HTTP endpoint on a background thread.

        Returns:
            int: The bound port.
        """
        if self._httpd is not None:
            raise RuntimeError("MetricsServer already started")
        self._stopped.clear()
        self._httpd, self._thread = start_http_server(
            self._port, addr=self._addr, registry=self._registry
        )
        logger.info(f"Serving metrics on http://{self._addr}:{self.port}/metrics")
        return self.port

    def serve_forever(self) -> None:
        """
        Start (if needed) and block until stop() is called.
        """
        if self._httpd is None:
            self.start()
        self._stopped.wait()

    def stop(self) -> None:
        """Shut the HTTP endpoint down and release the socket."""
        if self._httpd is not None:
            self._httpd.shutdown()
            self._httpd.server_close()
            if self._thread is not None:
                self._thread.join(timeout=5)
            logger.info("Metrics server stopped.")
        self._httpd = None
        self._thread = None
        self._stopped.set()
