from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _reset_structlog() -> Generator[None, None, None]:
    """Keep logging configuration from leaking between unit tests."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
