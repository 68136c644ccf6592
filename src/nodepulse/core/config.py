"""
Configuration management for NodePulse.

Uses Pydantic Settings for environment variable validation and type safety.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class MetricsConfig(BaseSettings):
    """Health score update and metric registry configuration."""

    update_interval_seconds: float = Field(
        default=60.0,
        ge=0.0,
        description="Seconds between health score updates (0 runs cycles back-to-back)"
    )
    include_process_metrics: bool = Field(
        default=True,
        description="Export process_* and python_info metrics alongside the health score"
    )
    namespace: str = Field(
        default="",
        pattern=r"^([a-zA-Z_:][a-zA-Z0-9_:]*)?$",
        description="Optional prefix for the health gauge name (<namespace>_service_health_score)"
    )

    class Config:
        env_prefix = "METRICS_"


class ServerConfig(BaseSettings):
    """HTTP server configuration for the /metrics endpoint."""

    host: str = Field(
        default="0.0.0.0",
        description="Listen address"
    )
    port: int = Field(
        default=9100,
        ge=1,
        le=65535,
        description="Listen port"
    )

    class Config:
        env_prefix = "API_"


class StatusSourceConfig(BaseSettings):
    """Node status endpoint configuration."""

    status_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the node API serving GET /status"
    )
    timeout: float = Field(
        default=5.0,
        gt=0.0,
        description="Status request timeout in seconds"
    )

    class Config:
        env_prefix = "NODE_"


class AppConfig(BaseSettings):
    """Main application configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # Nested configurations
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    status_source: StatusSourceConfig = Field(default_factory=StatusSourceConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {VALID_LOG_LEVELS}")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Lazily loads configuration on first access.

    Returns:
        AppConfig: The global configuration instance
    """
    global _config
    if _config is None:
        _config = AppConfig(
            metrics=MetricsConfig(),
            server=ServerConfig(),
            status_source=StatusSourceConfig(),
        )
    return _config


def reload_config() -> AppConfig:
    """
    Reload configuration from environment variables.

    Useful for testing or when environment changes.

    Returns:
        AppConfig: The reloaded configuration instance
    """
    global _config
    _config = None
    return get_config()
