"""
Status sources for the node being monitored.

A status source hands the scheduler a fresh ServiceStatus each cycle. The
HTTP source polls the node's JSON status endpoint; the static source returns
a fixed status and is meant for tests and local runs.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from nodepulse.errors import StatusUnavailableError

from .models import ServiceStatus

logger = logging.getLogger(__name__)


class HttpStatusSource:
    """
    Fetches node status from ``GET <status_url>/status``.

    Usage:
        source = HttpStatusSource(status_url="http://localhost:3000")
        status = source.fetch_status()
        print(status.connected_peer_count())
    """

    def __init__(
        self,
        status_url: str = "http://localhost:3000",
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize HTTP status source.

        Args:
            status_url: Base URL of the node API
            timeout: HTTP request timeout in seconds
            client: Pre-configured httpx client (optional)
        """
        self.status_url = status_url.rstrip("/")
        self.endpoint = f"{self.status_url}/status"
        self.timeout = timeout

        if client:
            self.client = client
            self._owns_client = False
        else:
            self.client = httpx.Client(timeout=self.timeout)
            self._owns_client = True

    def fetch_status(self) -> ServiceStatus:
        """
        Fetch and validate the current node status.

        Returns:
            Parsed ServiceStatus

        Raises:
            StatusUnavailableError: If the node cannot be reached or replies
                with an error or an invalid payload
        """
        try:
            response = self.client.get(self.endpoint)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StatusUnavailableError(
                f"Status endpoint returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise StatusUnavailableError(f"Cannot reach {self.endpoint}: {e}") from e

        try:
            status = ServiceStatus.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise StatusUnavailableError(f"Invalid status payload: {e}") from e

        logger.debug(
            f"Fetched status: running={status.running}, "
            f"peers={len(status.peers)}, synced={status.latest_sync_timestamp is not None}"
        )
        return status

    def close(self) -> None:
        """Close the underlying HTTP client if this source created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class StaticStatusSource:
    """Status source returning a fixed, replaceable status."""

    def __init__(self, status: Optional[ServiceStatus] = None):
        self.status = status or ServiceStatus()

    def fetch_status(self) -> ServiceStatus:
        return self.status

    def close(self) -> None:
        pass
