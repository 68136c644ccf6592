"""
Health score service - periodically samples the node and updates its score.
"""

import asyncio
import logging
from typing import Optional, Protocol

from nodepulse.errors import StatusUnavailableError
from nodepulse.status.models import ServiceStatusProvider

from .calculator import score_to_status
from .updater import MetricsUpdater

logger = logging.getLogger(__name__)


class StatusSource(Protocol):
    def fetch_status(self) -> ServiceStatusProvider:
        ...


class HealthScoreService:
    """
    Service for continuous health score monitoring.

    Every interval:
    1. Fetch the node status
    2. Calculate the health score
    3. Write it into the health gauge

    Usage:
        service = HealthScoreService(updater, source, interval_seconds=60)
        await service.start()
        ...
        await service.stop()
    """

    def __init__(
        self,
        updater: MetricsUpdater,
        status_source: StatusSource,
        interval_seconds: float = 60.0,
    ):
        """
        Initialize health score service.

        Args:
            updater: Updater writing the health gauge
            status_source: Source of fresh node status
            interval_seconds: Seconds between cycles (0 runs them back-to-back)
        """
        self.updater = updater
        self.status_source = status_source
        self.interval_seconds = interval_seconds
        self.iterations = 0

        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._running

    async def run_once(self) -> Optional[int]:
        """
        Run one iteration of health score calculation.

        Returns:
            Score written, or None if the node status was unavailable
        """
        try:
            # httpx sync client, keep it off the event loop
            status = await asyncio.to_thread(self.status_source.fetch_status)
        except StatusUnavailableError as e:
            logger.warning(f"Skipping health score cycle: {e}")
            return None

        score = self.updater.update_service_health_score(status)
        if score is not None:
            logger.info(f"Health score: {score}/100 ({score_to_status(score)})")
        return score

    async def _update_loop(self) -> None:
        """Background loop that periodically updates the health score."""
        logger.info(
            f"Health score service started (interval: {self.interval_seconds}s)"
        )

        while self._running:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Health score iteration failed: {e}", exc_info=True)

            self.iterations += 1
            await asyncio.sleep(self.interval_seconds)

    async def start(self) -> None:
        """Start the periodic update loop."""
        if self._running:
            logger.warning("Health score service already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._update_loop())

    async def stop(self) -> None:
        """Stop the periodic update loop."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("Health score service stopped")

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()
