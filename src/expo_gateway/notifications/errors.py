"""Notification-related errors."""

from __future__ import annotations

MAX_BATCH_SIZE = 100


class NotificationValidationError(ValueError):
    """Raised when a notification payload is missing fields or has malformed ones."""


class BatchSizeExceededError(ValueError):
    """Raised when a batch holds more messages than the push service accepts per request."""

    def __init__(self, size: int, limit: int = MAX_BATCH_SIZE) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Batch size {size} exceeds {limit}. Split your payloads before calling this function.")


class MalformedResponseError(Exception):
    """Raised when the push service answers with a body that cannot be read as tickets."""
