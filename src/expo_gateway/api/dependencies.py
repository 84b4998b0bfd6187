from __future__ import annotations

from typing import TYPE_CHECKING, cast

from fastapi import Request

if TYPE_CHECKING:
    from expo_gateway.notifications import PushSender


def get_sender(request: Request) -> PushSender:
    return cast("PushSender", request.app.state.sender)
