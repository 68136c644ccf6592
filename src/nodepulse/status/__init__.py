"""
Node status models and sources.
"""

from .models import ServiceStatus, ServiceStatusProvider
from .client import HttpStatusSource, StaticStatusSource

__all__ = [
    "ServiceStatus",
    "ServiceStatusProvider",
    "HttpStatusSource",
    "StaticStatusSource",
]
