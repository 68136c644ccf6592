"""
Core configuration for NodePulse.
"""

from .config import (
    AppConfig,
    MetricsConfig,
    ServerConfig,
    StatusSourceConfig,
    get_config,
    reload_config,
)

__all__ = [
    "AppConfig",
    "MetricsConfig",
    "ServerConfig",
    "StatusSourceConfig",
    "get_config",
    "reload_config",
]
