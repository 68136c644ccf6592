"""
Start-up wiring for the metrics pipeline.

Builds the registry, registers the health gauge (and optionally the standard
process collectors) and hands back everything the scheduler and the HTTP app
need. Call it once, before any update or scrape traffic starts.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from prometheus_client import CollectorRegistry, GCCollector, PlatformCollector, ProcessCollector

from nodepulse import HEALTH_SCORE_HELP, HEALTH_SCORE_METRIC
from nodepulse.core.config import MetricsConfig
from nodepulse.health_score.updater import MetricsUpdater
from nodepulse.metrics.exporter import MetricsExporter
from nodepulse.metrics.registry import IntGauge, MetricsRegistry

logger = logging.getLogger(__name__)


@dataclass
class NodeMetrics:
    """Metrics objects shared by the scheduler and the HTTP app."""

    registry: MetricsRegistry
    health_gauge: IntGauge
    updater: MetricsUpdater
    exporter: MetricsExporter


def health_score_metric_name(namespace: str = "") -> str:
    """Health gauge name, prefixed with ``<namespace>_`` when one is set."""
    if namespace:
        return f"{namespace}_{HEALTH_SCORE_METRIC}"
    return HEALTH_SCORE_METRIC


def build_metrics(
    config: Optional[MetricsConfig] = None,
    registry: Optional[MetricsRegistry] = None,
) -> NodeMetrics:
    """
    Build the metrics pipeline.

    Args:
        config: Metrics configuration (defaults from environment if omitted)
        registry: Registry to populate (a fresh one if omitted)

    Returns:
        NodeMetrics bundle

    Raises:
        MetricRegistrationError: If a metric name is already taken
    """
    if config is None:
        config = MetricsConfig()
    # An empty MetricsRegistry is falsy, compare against None
    if registry is None:
        registry = MetricsRegistry()

    health_gauge = registry.register_gauge(
        health_score_metric_name(config.namespace), HEALTH_SCORE_HELP
    )

    if config.include_process_metrics:
        registry.register_collector(ProcessCollector(registry=None))
        registry.register_collector(PlatformCollector(registry=None))
        # GCCollector registers itself unconditionally, so park it in a throwaway registry
        registry.register_collector(GCCollector(registry=CollectorRegistry()))

    logger.info(
        f"Metrics registry ready ({len(registry.snapshot())} metric families, "
        f"process metrics: {config.include_process_metrics})"
    )

    return NodeMetrics(
        registry=registry,
        health_gauge=health_gauge,
        updater=MetricsUpdater(health_gauge),
        exporter=MetricsExporter(registry),
    )
