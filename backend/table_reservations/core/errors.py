"""
Centralized error handling for the reservations API.
Routes and validation rules raise ApiError; the handlers here render every failure as {"error": message}
so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_NOT_FOUND = 404
STATUS_METHOD_NOT_ALLOWED = 405
STATUS_INTERNAL_ERROR = 500

MSG_MALFORMED_BODY = "Request body must be valid JSON"
MSG_INTERNAL_ERROR = "Something went wrong!"


class ApiError(Exception):
    """An error with an HTTP status and a client-facing message."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"ApiError(status={self.status!r}, message={self.message!r})"


def bad_request(message: str) -> ApiError:
    return ApiError(STATUS_BAD_REQUEST, message)


def not_found(message: str) -> ApiError:
    return ApiError(STATUS_NOT_FOUND, message)


def error_response(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.status, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors and errors[0].get("type") == "json_invalid":
        return error_response(STATUS_BAD_REQUEST, MSG_MALFORMED_BODY)
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return error_response(STATUS_BAD_REQUEST, "; ".join(parts) or MSG_MALFORMED_BODY)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == STATUS_NOT_FOUND:
        return error_response(STATUS_NOT_FOUND, f"Path not found: {request.url.path}")
    if exc.status_code == STATUS_METHOD_NOT_ALLOWED:
        return error_response(
            STATUS_METHOD_NOT_ALLOWED, f"{request.method} not allowed for {request.url.path}"
        )
    return error_response(exc.status_code, str(exc.detail))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return error_response(STATUS_INTERNAL_ERROR, MSG_INTERNAL_ERROR)


def install_error_handlers(app: FastAPI) -> None:
    """Register the handlers that turn exceptions into {"error": message} JSON responses."""
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
