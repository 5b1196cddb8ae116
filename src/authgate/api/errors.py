"""
authgate.api.errors

Translation of engine errors into HTTP responses.

Responsibilities:
- Map each `AuthError` kind onto a status code.
- Return only the generic message; log the internal detail.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_403_FORBIDDEN,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from authgate.auth.errors import (
    AuthError,
    CorruptHashError,
    LoginFailed,
    TokenError,
    UsernameAlreadyTaken,
)
from authgate.observability.logging import get_logger

log = get_logger(__name__)

UNKNOWN_ERROR_MESSAGE = "an unknown error has occurred"


def status_for(error: AuthError) -> int:
    if isinstance(error, UsernameAlreadyTaken):
        return HTTP_409_CONFLICT
    if isinstance(error, (LoginFailed, TokenError)):
        return HTTP_403_FORBIDDEN
    return HTTP_500_INTERNAL_SERVER_ERROR


async def _auth_error_handler(_: Request, exc: AuthError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        log.error("auth_error", kind=type(exc).__name__, detail=exc.detail)
        message = UNKNOWN_ERROR_MESSAGE
    else:
        message = exc.message
    return JSONResponse(status_code=status_code, content={"detail": message})


async def _corrupt_hash_handler(_: Request, exc: CorruptHashError) -> JSONResponse:
    log.error("corrupt_password_hash", error=str(exc))
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": UNKNOWN_ERROR_MESSAGE},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, _auth_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(CorruptHashError, _corrupt_hash_handler)  # type: ignore[arg-type]


# --- Module Notes -----------------------------------------------------------
# LoginFailed and TokenError deliberately share one status and one message so that
# clients cannot tell an unknown username, a wrong password and a bad token apart.
