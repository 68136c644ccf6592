"""
Node status data models.
"""

from datetime import datetime
from typing import List, Optional, Protocol

from pydantic import BaseModel, Field


class ServiceStatusProvider(Protocol):
    """
    Read-only view of a node that the health score is computed from.

    Any object with these three methods can be scored; implementations may
    raise while the node is starting up or shutting down.
    """

    def is_running(self) -> bool:
        ...

    def connected_peer_count(self) -> int:
        ...

    def last_sync_timestamp(self) -> Optional[datetime]:
        ...


class ServiceStatus(BaseModel):
    """
    Point-in-time status of a node as reported by its status endpoint.
    """

    running: bool = False
    peers: List[str] = Field(default_factory=list, description="Node ids of listed peers")
    latest_sync_timestamp: Optional[datetime] = Field(
        default=None,
        description="When the node last completed a sync, if ever"
    )

    def is_running(self) -> bool:
        return self.running

    def connected_peer_count(self) -> int:
        return len(self.peers)

    def last_sync_timestamp(self) -> Optional[datetime]:
        return self.latest_sync_timestamp

    class Config:
        json_schema_extra = {
            "example": {
                "running": True,
                "peers": [
                    "02a1b2c3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f60718293a4b5c6d7e8f90",
                ],
                "latest_sync_timestamp": "2026-01-15T10:30:00Z",
            }
        }
