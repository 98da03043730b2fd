"""Callable error taxonomy and the FastAPI handlers that render it.

Every failure leaves the service as ``{"error": {"status": ..., "message": ...}}``
so clients can branch on ``status`` without parsing message text.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invites_api.models.enums import ErrorKind

log = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal error."


class CallableError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": {"status": self.kind.status, "message": self.message}}


class UnauthenticatedError(CallableError):
    kind = ErrorKind.UNAUTHENTICATED


class InvalidArgumentError(CallableError):
    kind = ErrorKind.INVALID_ARGUMENT


class NotFoundError(CallableError):
    kind = ErrorKind.NOT_FOUND


class FailedPreconditionError(CallableError):
    kind = ErrorKind.FAILED_PRECONDITION


class InternalError(CallableError):
    kind = ErrorKind.INTERNAL


async def callable_error_handler(request: Request, exc: CallableError) -> JSONResponse:
    return JSONResponse(status_code=exc.kind.http_status, content=exc.to_payload())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = InvalidArgumentError("Bad Request")
    return JSONResponse(status_code=error.kind.http_status, content=error.to_payload())


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    error = InternalError(INTERNAL_ERROR_MESSAGE)
    return JSONResponse(status_code=error.kind.http_status, content=error.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CallableError, callable_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
