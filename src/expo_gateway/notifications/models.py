from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TypeVar

from expo_gateway.notifications.errors import MalformedResponseError, NotificationValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

REQUIRED_FIELDS_MESSAGE = "to, title and body fields are required"
DEFAULT_TICKET_ERROR = "Expo push error"

_E = TypeVar("_E", bound=StrEnum)


class Sound(StrEnum):
    DEFAULT = "default"


class Priority(StrEnum):
    DEFAULT = "default"
    NORMAL = "normal"
    HIGH = "high"


class TicketStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


def _read_str(raw: Mapping[str, object], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        msg = f"{key} must be a string"
        raise NotificationValidationError(msg)
    return value


def _read_enum(raw: Mapping[str, object], key: str, enum: type[_E]) -> _E | None:
    value = raw.get(key)
    if value is None:
        return None
    try:
        return enum(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum)
        msg = f"{key} must be one of: {allowed}"
        raise NotificationValidationError(msg) from exc


def _read_number(raw: Mapping[str, object], key: str, *, integer: bool) -> int | float | None:
    value = raw.get(key)
    if value is None:
        return None
    allowed: tuple[type, ...] = (int,) if integer else (int, float)
    if isinstance(value, bool) or not isinstance(value, allowed):
        msg = f"{key} must be {'an integer' if integer else 'a number'}"
        raise NotificationValidationError(msg)
    if value < 0:
        msg = f"{key} must be non-negative"
        raise NotificationValidationError(msg)
    return value


@dataclass(frozen=True, slots=True)
class NotificationRequest:
    to: str
    title: str
    body: str
    data: Mapping[str, Any] | None = None
    sound: Sound | None = None
    priority: Priority | None = None
    ttl: int | None = None
    expiration: int | float | None = None

    def to_message(self) -> dict[str, object]:
        """Build the push service message, resolving defaults for optional fields."""
        message: dict[str, object] = {
            "to": self.to,
            "title": self.title,
            "body": self.body,
            "data": dict(self.data) if self.data is not None else {},
            "sound": (self.sound or Sound.DEFAULT).value,
            "priority": (self.priority or Priority.HIGH).value,
        }
        if self.ttl is not None:
            message["ttl"] = self.ttl
        if self.expiration is not None:
            message["expiration"] = self.expiration
        return message

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object], *, require_content: bool = True) -> NotificationRequest:
        """Build a request from decoded JSON.

        With ``require_content`` disabled, missing ``to``/``title``/``body``
        become empty strings so the token check downstream decides what to
        drop. Malformed optional fields are always rejected.
        """
        to = _read_str(raw, "to")
        title = _read_str(raw, "title")
        body = _read_str(raw, "body")
        if require_content and not (to and title and body):
            raise NotificationValidationError(REQUIRED_FIELDS_MESSAGE)

        data = raw.get("data")
        if data is not None and not isinstance(data, dict):
            msg = "data must be an object"
            raise NotificationValidationError(msg)

        return cls(
            to=to,
            title=title,
            body=body,
            data=data,
            sound=_read_enum(raw, "sound", Sound),
            priority=_read_enum(raw, "priority", Priority),
            ttl=_read_number(raw, "ttl", integer=True),
            expiration=_read_number(raw, "expiration", integer=False),
        )


@dataclass(frozen=True, slots=True)
class PushTicket:
    status: str
    id: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None

    @property
    def is_ok(self) -> bool:
        return self.status == TicketStatus.OK

    @classmethod
    def from_wire(cls, raw: object) -> PushTicket:
        if not isinstance(raw, dict):
            msg = "ticket must be an object"
            raise MalformedResponseError(msg)
        status = raw.get("status")
        if not isinstance(status, str):
            msg = "ticket is missing status"
            raise MalformedResponseError(msg)
        ticket_id = raw.get("id")
        message = raw.get("message")
        details = raw.get("details")
        return cls(
            status=status,
            id=ticket_id if isinstance(ticket_id, str) else None,
            message=message if isinstance(message, str) else None,
            details=details if isinstance(details, dict) else None,
        )


@dataclass(frozen=True, slots=True)
class PushResult:
    success: bool
    ticket_id: str | None = None
    error: str | None = None
    details: Mapping[str, Any] | None = None

    @classmethod
    def from_ticket(cls, ticket: PushTicket) -> PushResult:
        if ticket.is_ok:
            return cls(success=True, ticket_id=ticket.id)
        return cls(success=False, error=ticket.message or DEFAULT_TICKET_ERROR, details=ticket.details)

    @classmethod
    def failure(cls, error: str, details: Mapping[str, Any] | None = None) -> PushResult:
        return cls(success=False, error=error, details=details)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"success": self.success}
        if self.ticket_id is not None:
            payload["ticketId"] = self.ticket_id
        if self.error is not None:
            payload["error"] = self.error
        if self.details is not None:
            payload["details"] = dict(self.details)
        return payload


@dataclass(frozen=True, slots=True)
class BatchItemResult:
    index: int
    result: PushResult

    @property
    def success(self) -> bool:
        return self.result.success

    def to_dict(self) -> dict[str, object]:
        return {"index": self.index, **self.result.to_dict()}


@dataclass(frozen=True, slots=True)
class BatchPushResult:
    success: bool
    results: tuple[BatchItemResult, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[BatchItemResult]) -> BatchPushResult:
        collected = tuple(results)
        # an empty batch never counts as delivered
        return cls(success=bool(collected) and all(item.success for item in collected), results=collected)

    @classmethod
    def failed(cls) -> BatchPushResult:
        return cls(success=False)

    def to_dict(self) -> dict[str, object]:
        return {"success": self.success, "results": [item.to_dict() for item in self.results]}
