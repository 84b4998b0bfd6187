from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from expo_gateway.notifications.models import BatchPushResult, NotificationRequest, PushResult


class PushSender(ABC):
    @abstractmethod
    async def send(self, request: NotificationRequest) -> PushResult: ...

    @abstractmethod
    async def send_batch(self, requests: Sequence[NotificationRequest]) -> BatchPushResult: ...
