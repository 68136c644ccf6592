"""
Health score calculation logic.
"""

from .models import HealthSignal


class HealthScoreCalculator:
    """
    Calculates the node health score from its status signals.

    Each degraded component carries a severity with a fixed weight:

    - Critical (node not running): score is 0, nothing else counts
    - Major (running but no peers): -35
    - Minor (running but not synced): -25

    Health score = 100 - sum(severity weights)

    The only reachable scores are 0, 40, 65, 75 and 100.
    """

    MAX_SCORE = 100
    CRITICAL_SCORE = 0

    SEVERITY_PENALTIES = {
        "major": 35,
        "minor": 25,
    }

    def compute_health_score(self, signal: HealthSignal) -> int:
        """
        Compute health score from signals.

        Args:
            signal: Running, peer and sync signals

        Returns:
            Health score (0-100)
        """
        if not signal.is_running:
            return self.CRITICAL_SCORE

        score = self.MAX_SCORE

        if not signal.has_peers:
            score -= self.SEVERITY_PENALTIES["major"]

        if not signal.is_synced:
            score -= self.SEVERITY_PENALTIES["minor"]

        return score


_calculator = HealthScoreCalculator()


def compute_health_score(is_running: bool, has_peers: bool, is_synced: bool) -> int:
    """
    Compute the health score for a node.

    Pure function: the same inputs always give the same score.

    Args:
        is_running: Node is up
        has_peers: Node has at least one listed peer
        is_synced: Node has completed a sync at least once

    Returns:
        One of 0, 40, 65, 75, 100
    """
    return _calculator.compute_health_score(
        HealthSignal(is_running=is_running, has_peers=has_peers, is_synced=is_synced)
    )


def score_to_status(score: int) -> str:
    """Convert a numeric score to a health status label."""
    if score >= HealthScoreCalculator.MAX_SCORE:
        return "healthy"
    elif score <= HealthScoreCalculator.CRITICAL_SCORE:
        return "down"
    else:
        return "degraded"
