from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import httpx
import typer
import uvicorn

from expo_gateway.api import create_app
from expo_gateway.config import ConfigError, load_config
from expo_gateway.notifications import ExpoPushSender, NotificationRequest, NotificationValidationError
from expo_gateway.observability import configure_logging, get_logger

if TYPE_CHECKING:
    from expo_gateway.config import AppConfig
    from expo_gateway.notifications import PushResult

logger = get_logger(__name__)

app = typer.Typer(add_completion=False)

ConfigOption = Annotated[Path | None, typer.Option("-c", "--config")]


def _load(config_path: Path | None) -> AppConfig:
    try:
        return load_config(config_path)
    except ConfigError as exc:
        logger.error("config_invalid", error=str(exc), cause=str(exc.__cause__) if exc.__cause__ else None)
        raise typer.Exit(code=1) from exc


@app.command()
def serve(config: ConfigOption = None) -> None:
    configure_logging()
    app_config = _load(config)
    logger.info("gateway_listening", host=app_config.server.host, port=app_config.server.port)
    uvicorn.run(
        create_app(app_config),
        host=app_config.server.host,
        port=app_config.server.port,
        log_config=None,
    )


@app.command()
def send(
    to: Annotated[str, typer.Option("--to")],
    title: Annotated[str, typer.Option("--title")],
    body: Annotated[str, typer.Option("--body")],
    config: ConfigOption = None,
) -> None:
    configure_logging()
    app_config = _load(config)
    try:
        request = NotificationRequest.from_mapping({"to": to, "title": title, "body": body})
    except NotificationValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    result = asyncio.run(_send_once(app_config, request))
    typer.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    if not result.success:
        raise typer.Exit(code=1)


async def _send_once(config: AppConfig, request: NotificationRequest) -> PushResult:
    async with httpx.AsyncClient() as client:
        sender = ExpoPushSender(client=client, config=config.expo)
        return await sender.send(request)


if __name__ == "__main__":
    app()
