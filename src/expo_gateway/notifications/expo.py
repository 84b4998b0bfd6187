from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from expo_gateway.notifications.base import PushSender
from expo_gateway.notifications.errors import MAX_BATCH_SIZE, BatchSizeExceededError, MalformedResponseError
from expo_gateway.notifications.models import BatchItemResult, BatchPushResult, PushResult, PushTicket
from expo_gateway.notifications.tokens import is_expo_push_token
from expo_gateway.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from expo_gateway.config.models import ExpoConfig
    from expo_gateway.notifications.models import NotificationRequest

logger = get_logger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid Expo push token format"

_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, MalformedResponseError)


def describe_failure(exc: Exception) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return "Timed out while sending push notification"
    if isinstance(exc, httpx.HTTPStatusError):
        return f"Expo push service responded with status {exc.response.status_code}"
    if isinstance(exc, MalformedResponseError):
        return f"Malformed response from Expo push service: {exc}"
    return "Error while sending push notification"


class ExpoPushSender(PushSender):
    """Sends notifications to the Expo push API.

    Both operations make exactly one HTTP request and never retry. Transport
    problems are reported through the returned result rather than raised.
    """

    def __init__(self, client: httpx.AsyncClient, config: ExpoConfig) -> None:
        self._client = client
        self._config = config

    async def send(self, request: NotificationRequest) -> PushResult:
        if not is_expo_push_token(request.to):
            logger.warning("push_invalid_token", to=request.to)
            return PushResult.failure(INVALID_TOKEN_MESSAGE, details={"to": request.to})

        try:
            data = await self._post(request.to_message(), timeout=self._config.send_timeout_seconds)
            ticket = PushTicket.from_wire(data)
        except _TRANSPORT_ERRORS as exc:
            logger.error("push_transport_failed", error=str(exc), error_type=type(exc).__name__)
            return PushResult.failure(describe_failure(exc))

        if ticket.is_ok:
            logger.info("push_sent", to=request.to, ticket_id=ticket.id)
        else:
            logger.error("push_ticket_error", to=request.to, message=ticket.message, details=ticket.details)
        return PushResult.from_ticket(ticket)

    async def send_batch(self, requests: Sequence[NotificationRequest]) -> BatchPushResult:
        if len(requests) > MAX_BATCH_SIZE:
            raise BatchSizeExceededError(len(requests))

        accepted: list[tuple[int, NotificationRequest]] = []
        for index, request in enumerate(requests):
            if is_expo_push_token(request.to):
                accepted.append((index, request))
            else:
                logger.warning("push_batch_token_skipped", index=index, to=request.to)

        if not accepted:
            return BatchPushResult.failed()

        messages = [request.to_message() for _, request in accepted]
        try:
            data = await self._post(messages, timeout=self._config.batch_timeout_seconds)
            tickets = self._parse_tickets(data, expected=len(accepted))
        except _TRANSPORT_ERRORS as exc:
            logger.error("push_batch_transport_failed", error=str(exc), error_type=type(exc).__name__, size=len(accepted))
            return BatchPushResult.failed()

        batch = BatchPushResult.from_results(
            BatchItemResult(index=index, result=PushResult.from_ticket(ticket))
            for (index, _), ticket in zip(accepted, tickets, strict=True)
        )
        logger.info(
            "push_batch_sent",
            total=len(requests),
            valid=len(accepted),
            successful=sum(1 for item in batch.results if item.success),
        )
        return batch

    async def _post(self, body: object, *, timeout: float) -> object:
        response = await self._client.post(
            self._config.push_endpoint,
            json=body,
            headers=self._headers(),
            timeout=timeout,
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            msg = "response body is not JSON"
            raise MalformedResponseError(msg) from exc
        if not isinstance(payload, dict) or "data" not in payload:
            msg = "response is missing data"
            raise MalformedResponseError(msg)
        return payload["data"]

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._config.access_token is not None:
            headers["Authorization"] = f"Bearer {self._config.access_token}"
        return headers

    @staticmethod
    def _parse_tickets(data: object, *, expected: int) -> list[PushTicket]:
        if not isinstance(data, list):
            msg = "batch response data must be a list"
            raise MalformedResponseError(msg)
        # tickets are matched to messages by position
        if len(data) != expected:
            msg = f"expected {expected} tickets, got {len(data)}"
            raise MalformedResponseError(msg)
        return [PushTicket.from_wire(item) for item in data]
