"""
Tests for health score calculation and the single-shot updater.

Run with: pytest tests/
"""

import itertools
import threading

import pytest

from nodepulse.health_score.calculator import (
    HealthScoreCalculator,
    compute_health_score,
    score_to_status,
)
from nodepulse.health_score.models import HealthSignal
from nodepulse.health_score.updater import MetricsUpdater
from nodepulse.status.models import ServiceStatus

from conftest import FakeNode, ShuttingDownNode

REACHABLE_SCORES = {0, 40, 65, 75, 100}


class TestHealthScoreCalculator:
    """Test the scoring rules."""

    def test_not_running_is_zero(self):
        assert compute_health_score(False, True, True) == 0
        assert compute_health_score(False, False, False) == 0
        assert compute_health_score(False, True, False) == 0
        assert compute_health_score(False, False, True) == 0

    def test_fully_healthy(self):
        assert compute_health_score(True, True, True) == 100

    def test_no_peers_is_major(self):
        assert compute_health_score(True, False, True) == 65

    def test_not_synced_is_minor(self):
        assert compute_health_score(True, True, False) == 75

    def test_no_peers_and_not_synced(self):
        assert compute_health_score(True, False, False) == 40

    @pytest.mark.parametrize(
        "is_running,has_peers,is_synced",
        list(itertools.product([True, False], repeat=3)),
    )
    def test_only_known_scores_reachable(self, is_running, has_peers, is_synced):
        score = compute_health_score(is_running, has_peers, is_synced)
        assert score in REACHABLE_SCORES
        assert compute_health_score(is_running, has_peers, is_synced) == score

    def test_calculator_accepts_signal(self):
        calculator = HealthScoreCalculator()
        signal = HealthSignal(is_running=True, has_peers=False, is_synced=False)
        assert calculator.compute_health_score(signal) == 40

    def test_score_to_status(self):
        assert score_to_status(100) == "healthy"
        assert score_to_status(75) == "degraded"
        assert score_to_status(40) == "degraded"
        assert score_to_status(0) == "down"


class TestMetricsUpdater:
    """Test writing the score into the gauge."""

    def test_update_writes_gauge(self, node_metrics):
        score = node_metrics.updater.update_service_health_score(FakeNode())

        assert score == 100
        assert node_metrics.health_gauge.value == 100
        assert node_metrics.updater.last_score == 100

    def test_signals_derived_from_node(self, node_metrics):
        updater = node_metrics.updater

        assert updater.update_service_health_score(FakeNode(peers=[])) == 65
        assert updater.update_service_health_score(FakeNode(synced=False)) == 75
        assert updater.update_service_health_score(FakeNode(running=False)) == 0

    def test_listed_peer_counts_as_connected(self, node_metrics):
        # Peer count is the only signal; reachability is not checked
        status = ServiceStatus(running=True, peers=["unreachable"], latest_sync_timestamp=None)
        assert node_metrics.updater.update_service_health_score(status) == 75

    def test_unavailable_node_keeps_last_value(self, node_metrics):
        updater = node_metrics.updater
        updater.update_service_health_score(FakeNode(synced=False))

        assert updater.update_service_health_score(ShuttingDownNode()) is None
        assert node_metrics.health_gauge.value == 75
        assert updater.last_score == 75

    def test_gauge_starts_at_zero(self, node_metrics):
        assert node_metrics.health_gauge.value == 0
        assert node_metrics.updater.last_score is None

    def test_back_to_back_updates(self, node_metrics):
        updater = node_metrics.updater
        node = FakeNode(peers=[])

        results = [updater.update_service_health_score(node) for _ in range(100)]

        assert results == [65] * 100
        assert node_metrics.health_gauge.value == 65

    def test_calculate_does_not_write(self, registry):
        gauge = registry.register_gauge("node_score", "Score")
        updater = MetricsUpdater(gauge)

        assert updater.calculate_health_score(FakeNode()) == 100
        assert gauge.value == 0


class TestConcurrentUpdateAndExport:
    """Updates and scrapes racing on the same registry."""

    def test_exports_only_written_values(self, node_metrics):
        nodes = [
            FakeNode(),
            FakeNode(peers=[]),
            FakeNode(synced=False),
            FakeNode(peers=[], synced=False),
            FakeNode(running=False),
        ]
        written = {0}
        seen = []
        errors = []
        lock = threading.Lock()

        def update(node):
            try:
                for _ in range(200):
                    score = node_metrics.updater.update_service_health_score(node)
                    with lock:
                        written.add(score)
            except Exception as e:
                errors.append(e)

        def scrape():
            try:
                for _ in range(200):
                    text = node_metrics.exporter.gather_metrics()
                    for line in text.splitlines():
                        if line.startswith("service_health_score "):
                            seen.append(int(line.split()[1]))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=update, args=(node,)) for node in nodes]
        threads += [threading.Thread(target=scrape) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(seen) == 800
        assert set(seen) <= written
        assert set(seen) <= REACHABLE_SCORES
