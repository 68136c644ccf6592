#!/usr/bin/env python3
"""
nodepulsectl - NodePulse command line interface

- Serve the metrics endpoint and keep the health score current (nodepulsectl serve)
- Score the node once and print the exposition (nodepulsectl score)
- Version info (nodepulsectl version)
"""

import argparse
import logging
import sys

from nodepulse import __version__
from nodepulse.api.http_server import create_app, run_server
from nodepulse.bootstrap import build_metrics
from nodepulse.core.config import VALID_LOG_LEVELS, get_config
from nodepulse.errors import (
    MetricRegistrationError,
    SerializationError,
    StatusUnavailableError,
)
from nodepulse.health_score.calculator import score_to_status
from nodepulse.health_score.service import HealthScoreService
from nodepulse.status.client import HttpStatusSource

logger = logging.getLogger(__name__)


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    RESET = "\033[0m"


STATUS_COLORS = {
    "healthy": Colors.GREEN,
    "degraded": Colors.YELLOW,
    "down": Colors.RED,
}


def colorize(text: str, color: str) -> str:
    """Colorize text if stdout is a TTY."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def setup_logging(log_level: str):
    """
    Setup logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def cmd_serve(args) -> int:
    """
    Serve /metrics and update the health score on a fixed interval.

    Returns:
        Exit code (0 on clean shutdown, 1 on start-up failure)
    """
    config = get_config()

    try:
        metrics = build_metrics(config.metrics)
    except MetricRegistrationError as e:
        logger.error(f"Metric registration failed: {e}")
        return 1

    interval = args.interval if args.interval is not None else config.metrics.update_interval_seconds
    source = HttpStatusSource(
        status_url=args.status_url or config.status_source.status_url,
        timeout=config.status_source.timeout,
    )
    service = HealthScoreService(
        updater=metrics.updater,
        status_source=source,
        interval_seconds=interval,
    )

    app = create_app(metrics, service=service)
    try:
        run_server(
            app,
            host=args.host or config.server.host,
            port=args.port or config.server.port,
        )
    finally:
        source.close()
    return 0


def cmd_score(args) -> int:
    """
    Fetch the node status once, score it and print the exposition text.

    Returns:
        Exit code (0 on success, 1 if the node status was unavailable)
    """
    config = get_config()

    try:
        metrics = build_metrics(config.metrics)
    except MetricRegistrationError as e:
        logger.error(f"Metric registration failed: {e}")
        return 1

    with HttpStatusSource(
        status_url=args.status_url or config.status_source.status_url,
        timeout=config.status_source.timeout,
    ) as source:
        try:
            status = source.fetch_status()
        except StatusUnavailableError as e:
            print(colorize(f"✗ Node status unavailable: {e}", Colors.RED), file=sys.stderr)
            return 1

    score = metrics.updater.update_service_health_score(status)
    if score is None:
        print(colorize("✗ Could not score node", Colors.RED), file=sys.stderr)
        return 1

    label = score_to_status(score)
    print(colorize(f"Health score: {score}/100 ({label})", STATUS_COLORS[label]), file=sys.stderr)
    try:
        output = metrics.exporter.gather_metrics()
    except SerializationError as e:
        print(colorize(f"✗ Could not render metrics: {e}", Colors.RED), file=sys.stderr)
        return 1

    print(output, end="")
    return 0


def cmd_version(args) -> int:
    """
    Print version information.

    Returns:
        Exit code (always 0)
    """
    print(f"nodepulsectl version {__version__}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for nodepulsectl."""
    parser = argparse.ArgumentParser(
        description="NodePulse - node health score exporter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nodepulsectl serve                 # Serve /metrics on port 9100
  nodepulsectl score                 # Score the node once and print metrics
  nodepulsectl version               # Show version information

Environment variables:
  NODE_STATUS_URL                    # Node API base URL (default: http://localhost:3000)
  METRICS_UPDATE_INTERVAL_SECONDS    # Seconds between updates (default: 60)
  API_HOST / API_PORT                # Listen address (default: 0.0.0.0:9100)
  LOG_LEVEL                          # Logging level (default: INFO)
        """
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        default=None,
        help="Log level (default: from config)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve /metrics and update the health score periodically"
    )
    serve_parser.add_argument("--host", type=str, default=None, help="Listen address")
    serve_parser.add_argument("--port", type=int, default=None, help="Listen port")
    serve_parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between health score updates (default: from config)"
    )
    serve_parser.add_argument("--status-url", type=str, default=None, help="Node API base URL")

    score_parser = subparsers.add_parser(
        "score",
        help="Score the node once and print the metrics exposition"
    )
    score_parser.add_argument("--status-url", type=str, default=None, help="Node API base URL")

    subparsers.add_parser(
        "version",
        help="Show version information"
    )

    return parser


def main(argv=None):
    """Main entry point for nodepulsectl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.log_level or get_config().log_level)

    # Dispatch to command handlers
    if args.command == "serve":
        return cmd_serve(args)
    elif args.command == "score":
        return cmd_score(args)
    elif args.command == "version":
        return cmd_version(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
