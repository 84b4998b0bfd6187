from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_PUSH_ENDPOINT = "https://exp.host/--/api/v2/push/send"


def _is_valid_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)


class ExpoConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    push_endpoint: str = DEFAULT_PUSH_ENDPOINT
    send_timeout_seconds: float = Field(default=10.0, gt=0)
    batch_timeout_seconds: float = Field(default=15.0, gt=0)
    access_token: str | None = None

    @field_validator("push_endpoint")
    @classmethod
    def _validate_push_endpoint(cls, value: str) -> str:
        if not _is_valid_url(value):
            msg = "must be a valid URL"
            raise ValueError(msg)
        return value

    @field_validator("access_token")
    @classmethod
    def _validate_access_token(cls, value: str | None) -> str | None:
        if value == "":
            return None
        return value


class ServerConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str = "0.0.0.0"  # noqa: S104
    port: int = Field(default=4001, ge=1, le=65535)


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    expo: ExpoConfig = ExpoConfig()
    server: ServerConfig = ServerConfig()

    @classmethod
    def from_raw(cls, data: Mapping[str, object]) -> AppConfig:
        return cls.model_validate(data)
