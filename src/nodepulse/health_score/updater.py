"""
Single-shot health score update.

Samples a node, scores it and writes the score into the health gauge. The
updater keeps no timer of its own; whoever owns the node lifecycle decides
when to call it.
"""

import logging
from typing import Optional

from nodepulse.metrics.registry import IntGauge
from nodepulse.status.models import ServiceStatusProvider

from .calculator import HealthScoreCalculator, score_to_status
from .models import HealthSignal

logger = logging.getLogger(__name__)


class MetricsUpdater:
    """
    Writes the node health score into its gauge.

    Usage:
        updater = MetricsUpdater(health_gauge)
        updater.update_service_health_score(node)

    Safe to call back-to-back and from several threads; every call is
    independent and gives the same result for the same node state.
    """

    def __init__(
        self,
        health_gauge: IntGauge,
        calculator: Optional[HealthScoreCalculator] = None,
    ):
        """
        Initialize metrics updater.

        Args:
            health_gauge: Gauge receiving the score
            calculator: Health score calculator instance
        """
        self.health_gauge = health_gauge
        self.calculator = calculator or HealthScoreCalculator()
        self.last_score: Optional[int] = None

    def collect_signal(self, service: ServiceStatusProvider) -> HealthSignal:
        """
        Read the three health signals from the node.

        A node counts as having peers when its peer list is non-empty and as
        synced once it reports any sync timestamp.
        """
        return HealthSignal(
            is_running=service.is_running(),
            has_peers=service.connected_peer_count() > 0,
            is_synced=service.last_sync_timestamp() is not None,
        )

    def calculate_health_score(self, service: ServiceStatusProvider) -> int:
        """Score the node without touching the gauge."""
        return self.calculator.compute_health_score(self.collect_signal(service))

    def update_service_health_score(self, service: ServiceStatusProvider) -> Optional[int]:
        """
        Score the node and store the result in the health gauge.

        If the node cannot be queried the cycle is skipped and the gauge
        keeps its previous value.

        Args:
            service: Node status provider

        Returns:
            Score written, or None if the cycle was skipped
        """
        try:
            score = self.calculate_health_score(service)
        except Exception as e:
            logger.warning(f"Skipping health score update, node status unavailable: {e}")
            return None

        self.health_gauge.set(score)
        self.last_score = score

        logger.debug(f"Health score updated: {score}/100 ({score_to_status(score)})")
        return score
