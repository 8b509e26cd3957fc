from __future__ import annotations

import logging
from typing import Any, Callable

from appserver.application.config import ConfigService
from appserver.application.session import SessionUserService
from appserver.infrastructure import AnalyticsClient, AnalyticsError, get_analytics_client

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymousUser"


class AnalyticsService:
    """Turns service-layer events into analytics calls.

    Delivery problems are logged and never interrupt the calling operation.
    """

    def __init__(
        self,
        config_service: ConfigService,
        session_user_service: SessionUserService,
        client_provider: Callable[[], AnalyticsClient] = get_analytics_client,
    ) -> None:
        self._config_service = config_service
        self._session_user_service = session_user_service
        self._client_provider = client_provider

    def send_event(self, event: str, user_id: str, properties: dict[str, Any] | None = None) -> None:
        payload = dict(properties or {})
        payload["instanceId"] = self._config_service.get_instance_id()
        try:
            self._client_provider().track(user_id, event, payload)
        except AnalyticsError as exc:
            logger.warning("analytics event %s dropped: %s", event, exc)

    def _send_object_event(self, action: str, obj: Any, properties: dict[str, Any] | None) -> None:
        user = self._session_user_service.find_current_user()
        user_id = user.email if user else ANONYMOUS_USER
        payload = {"id": getattr(obj, "id", None), **(properties or {})}
        self.send_event(f"{action}_{type(obj).__name__}", user_id, payload)

    def send_create_event(self, obj: Any, properties: dict[str, Any] | None = None) -> None:
        self._send_object_event("create", obj, properties)

    def send_update_event(self, obj: Any, properties: dict[str, Any] | None = None) -> None:
        self._send_object_event("update", obj, properties)

    def send_delete_event(self, obj: Any, properties: dict[str, Any] | None = None) -> None:
        self._send_object_event("delete", obj, properties)
