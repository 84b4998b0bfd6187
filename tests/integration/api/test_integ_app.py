from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from expo_gateway.api import create_app
from expo_gateway.config import AppConfig
from tests.test_utils.helpers import PUSH_PATH, error_ticket, ok_ticket, wrap

if TYPE_CHECKING:
    from collections.abc import Generator

    from pytest_httpserver import HTTPServer

    from expo_gateway.config import ExpoConfig


@pytest.fixture
def client(push_config: ExpoConfig) -> Generator[TestClient, None, None]:
    with TestClient(create_app(AppConfig(expo=push_config))) as test_client:
        yield test_client


def test_send_forwards_to_push_service(httpserver: HTTPServer, client: TestClient) -> None:
    httpserver.expect_oneshot_request(PUSH_PATH, method="POST").respond_with_json(wrap(ok_ticket("T1")))

    response = client.post(
        "/api/notifications/send",
        json={"to": "ExponentPushToken[abc]", "title": "Hi", "body": "There"},
    )

    httpserver.check_assertions()
    assert response.status_code == 200
    assert response.json() == {"success": True, "ticketId": "T1"}


def test_send_reports_upstream_error_ticket(httpserver: HTTPServer, client: TestClient) -> None:
    httpserver.expect_oneshot_request(PUSH_PATH, method="POST").respond_with_json(
        wrap(error_ticket("DeviceNotRegistered", error="DeviceNotRegistered")),
    )

    response = client.post(
        "/api/notifications/send",
        json={"to": "ExponentPushToken[abc]", "title": "Hi", "body": "There"},
    )

    assert response.status_code == 500
    assert response.json()["error"] == "DeviceNotRegistered"


def test_send_batch_restores_original_indices(httpserver: HTTPServer, client: TestClient) -> None:
    httpserver.expect_oneshot_request(PUSH_PATH, method="POST").respond_with_json(
        wrap([ok_ticket("T0"), ok_ticket("T2")]),
    )
    notifications = [
        {"to": "ExponentPushToken[a]", "title": "t", "body": "b"},
        {"to": "invalid", "title": "t", "body": "b"},
        {"to": "ExponentPushToken[c]", "title": "t", "body": "b"},
    ]

    response = client.post("/api/notifications/send-batch", json={"notifications": notifications})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "results": [
            {"index": 0, "success": True, "ticketId": "T0"},
            {"index": 2, "success": True, "ticketId": "T2"},
        ],
    }


def test_send_batch_with_only_invalid_tokens_never_calls_upstream(httpserver: HTTPServer, client: TestClient) -> None:
    response = client.post(
        "/api/notifications/send-batch",
        json={"notifications": [{"to": "invalid", "title": "t", "body": "b"}]},
    )

    assert response.status_code == 200
    assert response.json() == {"success": False, "results": []}
    assert httpserver.log == []


def test_send_batch_drops_malformed_entries_and_dispatches_the_rest(httpserver: HTTPServer, client: TestClient) -> None:
    httpserver.expect_oneshot_request(
        PUSH_PATH,
        method="POST",
        json=[
            {"to": "ExponentPushToken[a]", "title": "t", "body": "b", "data": {}, "sound": "default", "priority": "high"},
        ],
    ).respond_with_json(wrap([ok_ticket("T0")]))
    notifications = [
        {"to": "ExponentPushToken[a]", "title": "t", "body": "b"},
        {"to": 12345, "title": "t", "body": "b"},
        {"to": "ExponentPushToken[c]", "title": 7, "body": "b"},
    ]

    response = client.post("/api/notifications/send-batch", json={"notifications": notifications})

    httpserver.check_assertions()
    assert response.status_code == 200
    assert response.json() == {"success": True, "results": [{"index": 0, "success": True, "ticketId": "T0"}]}
