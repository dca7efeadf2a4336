"""
Uniform JSON envelope for every response.

Success: {"success": true, "message": str, "data": object}
Failure: {"success": false, "message": str} plus a "debug" block only when
running with ENVIRONMENT=development.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.auth import authorize_before_validation
from app.config import get_settings
from app.errors import AppError

logger = logging.getLogger(__name__)

UNEXPECTED_MESSAGE = "An unexpected error occurred"


def send_success(message: str, data: Optional[dict] = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": jsonable_encoder(data or {})},
    )


def error_body(message: str, error: Optional[BaseException] = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None and get_settings().is_development:
        body["debug"] = {"type": type(error).__name__, "error": str(error)}
    return body


def send_error(status_code: int, message: str, error: Optional[BaseException] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(message, error))


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "invalid JSON payload in request body"
    # Drop the "body"/"path"/"query" prefix so the message names the field
    loc = [str(part) for part in first.get("loc", ())]
    if loc and loc[0] in ("body", "path", "query", "header"):
        loc = loc[1:]
    field = ".".join(loc)
    return f"{field}: {first.get('msg')}" if field else str(first.get("msg"))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return send_error(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    try:
        await authorize_before_validation(request)
    except AppError as auth_error:
        return send_error(auth_error.status_code, auth_error.message)
    return send_error(status.HTTP_400_BAD_REQUEST, _describe_validation_errors(exc.errors()), exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "The requested resource was not found"
    else:
        message = str(exc.detail)
    return send_error(exc.status_code, message)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return send_error(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_MESSAGE, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
