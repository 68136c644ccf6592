"""
Shared fixtures for NodePulse tests.
"""

from datetime import datetime, timezone
from typing import List, Optional

import pytest

from nodepulse.bootstrap import build_metrics
from nodepulse.core.config import MetricsConfig
from nodepulse.metrics.registry import MetricsRegistry


class FakeNode:
    """In-memory node exposing the status provider methods."""

    def __init__(
        self,
        running: bool = True,
        peers: Optional[List[str]] = None,
        synced: bool = True,
    ):
        self.running = running
        self.peers = ["peer-1"] if peers is None else peers
        self.synced_at = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc) if synced else None

    def is_running(self) -> bool:
        return self.running

    def connected_peer_count(self) -> int:
        return len(self.peers)

    def last_sync_timestamp(self) -> Optional[datetime]:
        return self.synced_at


class ShuttingDownNode:
    """Node whose status queries fail, as during shutdown."""

    def is_running(self) -> bool:
        raise RuntimeError("node is shutting down")

    def connected_peer_count(self) -> int:
        raise RuntimeError("node is shutting down")

    def last_sync_timestamp(self) -> Optional[datetime]:
        raise RuntimeError("node is shutting down")


@pytest.fixture
def registry():
    return MetricsRegistry()


@pytest.fixture
def node_metrics():
    """Metrics pipeline without process collectors, so output is predictable."""
    return build_metrics(MetricsConfig(include_process_metrics=False))
