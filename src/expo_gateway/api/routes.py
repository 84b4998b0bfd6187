from __future__ import annotations

from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from expo_gateway.api.dependencies import get_sender
from expo_gateway.api.responses import error_response
from expo_gateway.notifications import (
    MAX_BATCH_SIZE,
    NotificationRequest,
    NotificationValidationError,
    PushSender,
    is_expo_push_token,
)
from expo_gateway.notifications.expo import INVALID_TOKEN_MESSAGE
from expo_gateway.observability import get_logger

logger = get_logger(__name__)

router = APIRouter()

JsonObject = Annotated[dict[str, Any], Body()]
Sender = Annotated[PushSender, Depends(get_sender)]

# carries no routable token, so the batch sender drops it while keeping its index
_UNROUTABLE = NotificationRequest(to="", title="", body="")


def _batch_entry(index: int, raw: object) -> NotificationRequest:
    if not isinstance(raw, dict):
        logger.warning("batch_entry_rejected", index=index, error="entry must be an object")
        return _UNROUTABLE
    try:
        return NotificationRequest.from_mapping(raw, require_content=False)
    except NotificationValidationError as exc:
        logger.warning("batch_entry_rejected", index=index, error=str(exc))
        return _UNROUTABLE


@router.post("/send")
async def send_notification(payload: JsonObject, sender: Sender) -> JSONResponse:
    try:
        request = NotificationRequest.from_mapping(payload)
    except NotificationValidationError as exc:
        return error_response(HTTPStatus.BAD_REQUEST, str(exc))

    if not is_expo_push_token(request.to):
        return error_response(HTTPStatus.BAD_REQUEST, INVALID_TOKEN_MESSAGE)

    result = await sender.send(request)
    if not result.success:
        return error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "Failed to send notification",
            error=result.error,
            details=dict(result.details) if result.details is not None else None,
        )

    return JSONResponse(content=result.to_dict())


@router.post("/send-batch")
async def send_notification_batch(payload: JsonObject, sender: Sender) -> JSONResponse:
    notifications = payload.get("notifications")
    if not isinstance(notifications, list) or not notifications:
        return error_response(HTTPStatus.BAD_REQUEST, "notifications array is required")
    if len(notifications) > MAX_BATCH_SIZE:
        return error_response(HTTPStatus.BAD_REQUEST, f"Maximum {MAX_BATCH_SIZE} notifications allowed per request")

    requests = [_batch_entry(index, raw) for index, raw in enumerate(notifications)]
    result = await sender.send_batch(requests)
    return JSONResponse(content=result.to_dict())
