from __future__ import annotations

from fastapi.responses import JSONResponse


def error_response(status_code: int, message: str, **extra: object) -> JSONResponse:
    content: dict[str, object] = {"success": False, "message": message}
    content.update({key: value for key, value in extra.items() if value is not None})
    return JSONResponse(status_code=status_code, content=content)
