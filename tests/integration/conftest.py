from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from expo_gateway.config import ExpoConfig
from expo_gateway.notifications import ExpoPushSender
from tests.test_utils.helpers import PUSH_PATH

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from pytest_httpserver import HTTPServer


@pytest.fixture
def push_config(httpserver: HTTPServer) -> ExpoConfig:
    return ExpoConfig(
        push_endpoint=httpserver.url_for(PUSH_PATH),
        send_timeout_seconds=0.5,
        batch_timeout_seconds=0.5,
    )


@pytest.fixture
async def sender(push_config: ExpoConfig) -> AsyncIterator[ExpoPushSender]:
    async with httpx.AsyncClient() as client:
        yield ExpoPushSender(client, push_config)
