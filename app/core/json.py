# app/core/json.py
from typing import Any
import json
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from app.core.errors import AppError


class UTF8JSONResponse(JSONResponse):
    """
    JSON en UTF-8 sin escapes ASCII; jsonable_encoder convierte datetime.
    `read_at: null` se conserva (exclude_none=False).
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        payload = jsonable_encoder(content, exclude_none=False)
        return json.dumps(
            payload,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def error_response(exc: AppError) -> UTF8JSONResponse:
    return UTF8JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "kind": exc.kind},
    )
