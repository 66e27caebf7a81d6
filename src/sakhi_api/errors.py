"""
sakhi_api.errors

Error taxonomy shared by the auth layer and resource routers.

Responsibilities:
- Define typed exceptions for each client-visible failure (401/403/404/400).
- Render every error as a structured `{"message": ...}` body.
- Map unexpected failures to a generic 500 without leaking details.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from sakhi_api.observability.logging import get_logger

log = get_logger(__name__)


class SakhiError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class MissingCredential(SakhiError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Missing or invalid Authorization header"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class InvalidCredential(SakhiError):
    """
    Signature, payload or expiry failure.
    The message is always generic; the reason is only logged server-side.
    """

    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(SakhiError):
    status_code = HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(SakhiError):
    status_code = HTTP_404_NOT_FOUND
    default_message = "Not found"


class BadRequest(SakhiError):
    status_code = HTTP_400_BAD_REQUEST
    default_message = "Bad request"


def _message(message: str, **extra: Any) -> dict[str, Any]:
    return {"message": message, **extra}


async def _sakhi_error_handler(_: Request, exc: SakhiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content=_message(exc.message), headers=exc.headers
    )


async def _http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Framework-raised errors (unknown route, method not allowed) share the same body shape.
    return JSONResponse(
        status_code=exc.status_code,
        content=_message(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content=_message("Invalid data", errors=jsonable_encoder(exc.errors())),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled_error", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=_message("Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SakhiError, _sakhi_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)


# --- Module Notes -----------------------------------------------------------
# InsufficientData is deliberately absent: "not enough history" is a normal prediction
# result (see `sakhi_api.prediction`), not a failure.
