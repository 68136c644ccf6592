"""
Node health score module.

Calculates a node health score (0-100) from its running, peer and sync state
and keeps it current in the health gauge.
"""

from .calculator import HealthScoreCalculator, compute_health_score, score_to_status
from .models import HealthSignal
from .service import HealthScoreService
from .updater import MetricsUpdater

__all__ = [
    "HealthScoreCalculator",
    "HealthSignal",
    "HealthScoreService",
    "MetricsUpdater",
    "compute_health_score",
    "score_to_status",
]
