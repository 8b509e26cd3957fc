"""Analytics transport.

Product analytics are optional. When no endpoint is configured the service
layer talks to :class:`NoOpAnalyticsClient`; a deployment that wants events
installs an :class:`HttpAnalyticsClient` through ``configure_analytics_client``
during application start-up.
"""
from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)


class AnalyticsError(RuntimeError):
    """Raised when the analytics endpoint rejects an event."""


class AnalyticsClient(Protocol):
    """Contract for analytics integrations."""

    def track(self, user_id: str, event: str, properties: dict[str, Any]) -> None:
        """Record a single event for the given user."""


class NoOpAnalyticsClient:
    """Fallback client used when no analytics endpoint is configured."""

    def track(self, user_id: str, event: str, properties: dict[str, Any]) -> None:  # pragma: no cover - trivial
        logger.debug("analytics disabled, dropping %s for %s", event, user_id)


class HttpAnalyticsClient:
    """Posts events as JSON to a track endpoint."""

    def __init__(
        self,
        endpoint: str,
        write_key: str | None = None,
        *,
        timeout: float = 5.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        parsed = urlparse(endpoint)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("endpoint must include scheme and host")

        self._endpoint = endpoint
        self._write_key = write_key
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._write_key:
            headers["Authorization"] = f"Bearer {self._write_key}"
        return headers

    def track(self, user_id: str, event: str, properties: dict[str, Any]) -> None:
        body = {"userId": user_id, "event": event, "properties": properties}
        try:
            response = self._client.post(self._endpoint, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            raise AnalyticsError(f"failed to deliver {event}: {exc}") from exc
        if response.status_code >= 400:
            raise AnalyticsError(f"analytics endpoint returned {response.status_code} for {event}")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


_client: AnalyticsClient = NoOpAnalyticsClient()


def configure_analytics_client(client: AnalyticsClient) -> None:
    """Install the analytics client used by the service layer."""

    global _client
    _client = client


def get_analytics_client() -> AnalyticsClient:
    """Return the currently configured analytics client."""

    return _client
