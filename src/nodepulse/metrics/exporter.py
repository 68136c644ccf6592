"""
Metrics exporter for Prometheus scraping.

Renders a MetricsRegistry snapshot in the Prometheus text exposition format
(version 0.0.4). Integral values are written without a fractional part so the
health gauge reads ``service_health_score 100`` rather than ``100.0``.
"""

import logging
from typing import Dict, List

from prometheus_client.utils import floatToGoString

from nodepulse.errors import SerializationError

from .registry import MetricFamilySnapshot, MetricsRegistry, Number, SampleSnapshot

logger = logging.getLogger(__name__)

# Content type of the 0.0.4 text format written below
CONTENT_TYPE_TEXT_0_0_4 = "text/plain; version=0.0.4; charset=utf-8"

# OpenMetrics-only kinds have no direct equivalent in the 0.0.4 text format
TEXT_FORMAT_TYPES = {
    "info": "gauge",
    "stateset": "gauge",
    "gaugehistogram": "histogram",
    "unknown": "untyped",
}

# Samples written as their own gauge family after the main one
SEPARATE_SUFFIXES = ("_created", "_gsum", "_gcount")


def escape_help(text: str) -> str:
    return text.replace("\\", r"\\").replace("\n", r"\n")


def escape_label_value(value: str) -> str:
    return value.replace("\\", r"\\").replace("\n", r"\n").replace('"', r"\"")


def format_value(value: Number) -> str:
    """Render a sample value; integers stay integers."""
    if isinstance(value, int):
        return str(value)
    return floatToGoString(value)


def format_sample(sample: SampleSnapshot) -> str:
    """Render one sample line without the trailing newline."""
    if sample.labels:
        labels = ",".join(
            f'{key}="{escape_label_value(str(val))}"'
            for key, val in sample.labels.items()
        )
        return f"{sample.name}{{{labels}}} {format_value(sample.value)}"
    return f"{sample.name} {format_value(sample.value)}"


def render_family(family: MetricFamilySnapshot) -> List[str]:
    """
    Render one metric family as HELP, TYPE and sample lines.

    Args:
        family: Snapshot of the family

    Returns:
        Lines without trailing newlines
    """
    name = family.name
    kind = family.kind
    if kind == "counter":
        name = f"{name}_total"
    elif kind == "info":
        name = f"{name}_info"
    kind = TEXT_FORMAT_TYPES.get(kind, kind)

    lines = [
        f"# HELP {name} {escape_help(family.help)}",
        f"# TYPE {name} {kind}",
    ]

    separate: Dict[str, List[str]] = {}
    for sample in family.samples:
        for suffix in SEPARATE_SUFFIXES:
            if sample.name == family.name + suffix:
                separate.setdefault(suffix, []).append(format_sample(sample))
                break
        else:
            lines.append(format_sample(sample))

    for suffix, sample_lines in sorted(separate.items()):
        lines.append(f"# HELP {family.name}{suffix} {escape_help(family.help)}")
        lines.append(f"# TYPE {family.name}{suffix} gauge")
        lines.extend(sample_lines)

    return lines


class MetricsExporter:
    """
    Renders every metric of a registry for Prometheus.

    Usage:
        exporter = MetricsExporter(registry)
        text = exporter.gather_metrics()

    Exporting only reads the registry, so it may run concurrently with
    health score updates.
    """

    content_type = CONTENT_TYPE_TEXT_0_0_4

    def __init__(self, registry: MetricsRegistry):
        """
        Initialize metrics exporter.

        Args:
            registry: Registry whose metrics are exported
        """
        self.registry = registry

    def gather_metrics(self) -> str:
        """
        Render all registered metrics in text exposition format.

        Returns:
            Exposition text, one HELP/TYPE/sample block per metric

        Raises:
            SerializationError: If the output is not encodable as UTF-8
        """
        lines: List[str] = []
        for family in self.registry.snapshot():
            lines.extend(render_family(family))

        text = "".join(f"{line}\n" for line in lines)

        try:
            text.encode("utf-8")
        except UnicodeError as e:
            logger.error(f"Failed to encode metrics exposition: {e}")
            raise SerializationError(f"Metrics output is not valid UTF-8: {e}") from e

        return text
