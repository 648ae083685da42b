"""
descriptors.py

Static metric metadata and the per-scrape Sample value.

The three series names and help strings are the exporter's scrape contract;
dashboards and alerts depend on them, so they never change at runtime.
"""

import re
from dataclasses import dataclass

METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")

# (Reading attribute, help text), in exposition order.
_SERIES = (
    ("temperature", "Shows temperature"),
    ("pressure", "Shows pressure"),
    ("humidity", "Shows humidity"),
)


@dataclass(frozen=True)
class MetricDescriptor:
    name: str
    documentation: str
    # Reading attribute this series is populated from.
    field: str
    labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class Sample:
    descriptor: MetricDescriptor
    value: float
    # Unix seconds at which the underlying Reading was captured.
    timestamp: float


def build_descriptors(prefix: str) -> tuple[MetricDescriptor, ...]:
    """
    Build the temperature, pressure and humidity descriptors for ``prefix``.

    Raises:
        ValueError: ``prefix`` would not produce valid Prometheus metric names.
    """
    if not isinstance(prefix, str) or not METRIC_NAME_RE.match(prefix):
        raise ValueError(f"Invalid metric prefix: {prefix!r}")
    return tuple(
        MetricDescriptor(name=f"{prefix}_{field}", documentation=help_text, field=field)
        for field, help_text in _SERIES
    )
