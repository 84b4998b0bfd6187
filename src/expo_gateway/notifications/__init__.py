from expo_gateway.notifications.base import PushSender
from expo_gateway.notifications.errors import (
    MAX_BATCH_SIZE,
    BatchSizeExceededError,
    MalformedResponseError,
    NotificationValidationError,
)
from expo_gateway.notifications.expo import ExpoPushSender
from expo_gateway.notifications.models import (
    BatchItemResult,
    BatchPushResult,
    NotificationRequest,
    Priority,
    PushResult,
    PushTicket,
    Sound,
)
from expo_gateway.notifications.tokens import is_expo_push_token

__all__ = [
    "MAX_BATCH_SIZE",
    "BatchItemResult",
    "BatchPushResult",
    "BatchSizeExceededError",
    "ExpoPushSender",
    "MalformedResponseError",
    "NotificationRequest",
    "NotificationValidationError",
    "Priority",
    "PushResult",
    "PushSender",
    "PushTicket",
    "Sound",
    "is_expo_push_token",
]
