# shopfront/core/responses.py
"""
Response envelope helpers shared by all routers and exception handlers.

Success:  {"data": <payload>, "message": "<optional>"}
Error:    {"error": "<short code>", "message": "<human text>"}
"""

import math
from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from shopfront.core.errors import AppError


def _finite(value: Any) -> Any:
    """Replace NaN/inf with None so the body stays valid JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_finite(v) for v in value]
    return value


def to_json_safe(value: Any) -> Any:
    return _finite(jsonable_encoder(value))


def send_response(status_code: int, data: Any, message: str = "") -> JSONResponse:
    body: dict[str, Any] = {"data": to_json_safe(data)}
    if message:
        body["message"] = message
    return JSONResponse(status_code=status_code, content=body)


def send_success(data: Any, message: str = "") -> JSONResponse:
    return send_response(status.HTTP_200_OK, data, message)


def send_created(data: Any, message: str = "") -> JSONResponse:
    return send_response(status.HTTP_201_CREATED, data, message)


def send_error(exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message},
    )
