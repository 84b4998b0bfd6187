from __future__ import annotations

import time
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import TYPE_CHECKING

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from expo_gateway.api.responses import error_response
from expo_gateway.api.routes import router
from expo_gateway.notifications import ExpoPushSender
from expo_gateway.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi.responses import JSONResponse

    from expo_gateway.config import AppConfig
    from expo_gateway.notifications import PushSender

logger = get_logger(__name__)

SERVICE_NAME = "Expo Notification Gateway"


async def _request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        errors=[{key: value for key, value in error.items() if key != "input"} for error in errors],
    )
    return error_response(HTTPStatus.BAD_REQUEST, "request body must be a JSON object")


def create_app(config: AppConfig, *, sender: PushSender | None = None) -> FastAPI:
    """Build the gateway application.

    When ``sender`` is omitted an ``ExpoPushSender`` backed by a shared
    ``httpx.AsyncClient`` is created for the lifetime of the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.started_at = time.monotonic()
        if sender is not None:
            app.state.sender = sender
            yield
            return

        async with httpx.AsyncClient() as client:
            app.state.sender = ExpoPushSender(client=client, config=config.expo)
            logger.info("gateway_started", push_endpoint=config.expo.push_endpoint)
            yield

    app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "uptime": time.monotonic() - request.app.state.started_at,
        }

    app.include_router(router, prefix="/api/notifications", tags=["notifications"])
    return app
