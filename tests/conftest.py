"""Shared pytest configuration for all test levels."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from expo_gateway.config import ExpoConfig
from tests.test_utils.helpers import EXPO_ENDPOINT


@pytest.fixture
def expo_config() -> ExpoConfig:
    return ExpoConfig(push_endpoint=EXPO_ENDPOINT)


# Configure Hypothesis global settings
settings.register_profile(
    "dev",
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "ci",
    max_examples=100,
    deadline=5000,
)

if os.getenv("CI"):
    settings.load_profile("ci")
else:
    settings.load_profile("dev")


_LEVEL_MARKERS = {
    "unit": pytest.mark.unit,
    "integration": pytest.mark.integration,
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        rel = item.path.relative_to(Path(__file__).resolve().parent) if item.path else None
        if rel is None:
            continue
        for level, marker in _LEVEL_MARKERS.items():
            if rel.parts[0] == level:
                item.add_marker(marker)
                break
