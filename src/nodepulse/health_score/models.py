"""
Health score data models.
"""

from pydantic import BaseModel


class HealthSignal(BaseModel):
    """
    Input signals for health score calculation.

    Derived fresh from the node on every evaluation and discarded afterwards.
    """

    is_running: bool = False
    has_peers: bool = False
    is_synced: bool = False

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "is_running": True,
                "has_peers": True,
                "is_synced": False,
            }
        }
