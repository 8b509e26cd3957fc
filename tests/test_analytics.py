from __future__ import annotations

import json
import logging

import httpx
import pytest

from appserver.domain import Workspace
from appserver.infrastructure import AnalyticsError, HttpAnalyticsClient, configure_analytics_client


def _client(handler) -> tuple[HttpAnalyticsClient, httpx.Client]:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpAnalyticsClient("https://analytics.example.com/v1/track", "write-key", http_client=http_client), http_client


def test_track_posts_json_event():
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("authorization")
        captured["body"] = json.loads(request.content.decode("utf-8"))
        return httpx.Response(200, json={"success": True})

    client, http_client = _client(handler)
    client.track("api_user@test.com", "create_Workspace", {"id": "ws-1"})

    assert captured["url"] == "https://analytics.example.com/v1/track"
    assert captured["auth"] == "Bearer write-key"
    assert captured["body"] == {
        "userId": "api_user@test.com",
        "event": "create_Workspace",
        "properties": {"id": "ws-1"},
    }

    client.close()
    http_client.close()


def test_track_raises_on_error_status():
    client, http_client = _client(lambda request: httpx.Response(503))

    with pytest.raises(AnalyticsError):
        client.track("someone", "create_Application", {})

    http_client.close()


def test_endpoint_must_be_absolute():
    with pytest.raises(ValueError):
        HttpAnalyticsClient("/relative/track")


def test_service_events_carry_instance_id(container, api_user):
    events: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        events.append(json.loads(request.content.decode("utf-8")))
        return httpx.Response(200)

    client, http_client = _client(handler)
    configure_analytics_client(client)

    workspace = container.workspace_service.create(Workspace(name="Tracked"))

    assert [event["event"] for event in events] == ["create_Workspace"]
    assert events[0]["userId"] == api_user.email
    assert events[0]["properties"]["id"] == workspace.id
    assert events[0]["properties"]["instanceId"] == container.config_service.get_instance_id()

    http_client.close()


def test_delivery_failures_do_not_break_operations(container, api_user, caplog):
    client, http_client = _client(lambda request: httpx.Response(500))
    configure_analytics_client(client)

    with caplog.at_level(logging.WARNING, logger="appserver.application.analytics"):
        workspace = container.workspace_service.create(Workspace(name="Still created"))

    assert workspace.id is not None
    assert "create_Workspace dropped" in caplog.text

    http_client.close()
