"""
HTTP server for NodePulse.

Serves the Prometheus scrape endpoint and a JSON health summary. The health
score service runs alongside the app and is started and stopped with it.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import Response

from nodepulse import __version__
from nodepulse.bootstrap import NodeMetrics
from nodepulse.errors import SerializationError
from nodepulse.health_score.calculator import score_to_status
from nodepulse.health_score.service import HealthScoreService

logger = logging.getLogger(__name__)


def create_app(
    metrics: NodeMetrics,
    service: Optional[HealthScoreService] = None,
) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        metrics: Metrics pipeline built at start-up
        service: Health score service to run for the app's lifetime (optional)

    Returns:
        Configured FastAPI app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if service:
            await service.start()
        try:
            yield
        finally:
            if service:
                await service.stop()

    app = FastAPI(
        title="NodePulse",
        description="Node health score exporter",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.metrics = metrics

    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "NodePulse",
            "version": __version__,
            "endpoints": {
                "metrics": "/metrics",
                "health": "/health",
            },
        }

    @app.get("/metrics", response_class=Response)
    async def metrics_endpoint() -> Response:
        """
        Prometheus metrics endpoint.

        Returns every registered metric in text exposition format. A scrape
        during a node outage returns the last computed score.
        """
        try:
            output = metrics.exporter.gather_metrics()
        except SerializationError as e:
            logger.error(f"Failed to generate metrics: {e}")
            return Response(
                content="# error generating metrics\n",
                media_type="text/plain",
                status_code=500,
            )

        return Response(content=output, media_type=metrics.exporter.content_type)

    @app.get("/health")
    async def health_check() -> Dict[str, Any]:
        """Health summary derived from the last computed score."""
        score = metrics.updater.last_score
        if score is None:
            return {"status": "unknown", "score": None}
        return {"status": score_to_status(score), "score": score}

    return app


def run_server(app: FastAPI, host: str = "0.0.0.0", port: int = 9100) -> None:
    """
    Serve the app with uvicorn until interrupted.

    Args:
        app: App from create_app()
        host: Listen address
        port: Listen port
    """
    logger.info("=" * 60)
    logger.info("NodePulse - Metrics Server")
    logger.info("=" * 60)
    logger.info(f"Host: {host}")
    logger.info(f"Port: {port}")
    logger.info(f"Scrape endpoint: http://{host}:{port}/metrics")
    logger.info("=" * 60)

    uvicorn.run(app, host=host, port=port, log_level="warning")
