from .descriptors import MetricDescriptor, Sample, build_descriptors
from .server import FailurePolicy, MetricsServer, PolicyCollector

__all__ = [
    "MetricDescriptor",
    "Sample",
    "build_descriptors",
    "FailurePolicy",
    "MetricsServer",
    "PolicyCollector",
]
