"""
Metric registry and Prometheus text exporter.
"""

from .registry import IntGauge, MetricFamilySnapshot, MetricsRegistry, SampleSnapshot
from .exporter import MetricsExporter

__all__ = [
    "IntGauge",
    "MetricFamilySnapshot",
    "MetricsRegistry",
    "SampleSnapshot",
    "MetricsExporter",
]
