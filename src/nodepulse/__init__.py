"""
NodePulse - health score exporter for long-running network nodes

This package samples a node's running/peer/sync status, turns it into a single
0-100 health score and exposes it, together with process metrics, on a
Prometheus-compatible /metrics endpoint.

Main modules:
- metrics: metric registry and text exposition exporter
- health_score: health score calculation, single-shot updater and scheduler
- status: node status models and the HTTP status source
- api: FastAPI app serving /metrics and /health
- cli: nodepulsectl command line entry point
"""

__version__ = "0.1.0"
__author__ = "NodePulse Team"

# Name of the health gauge as seen by scrapers. Renaming it breaks dashboards.
HEALTH_SCORE_METRIC = "service_health_score"
HEALTH_SCORE_HELP = "Current health score (0-100)"


__all__ = [
    "__version__",
    "__author__",
    "HEALTH_SCORE_METRIC",
    "HEALTH_SCORE_HELP",
]
