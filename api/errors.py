"""
Boundary translator: domain errors → HTTP responses.

This is the only place that knows which ``ErrorKind`` maps to which
status code.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from utils.errors import ErrorKind, TaskManagerError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.AUTH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def handle_domain_error(request: Request, exc: TaskManagerError) -> JSONResponse:
    status_code = status_for(exc.kind)
    headers = None
    if exc.kind is ErrorKind.AUTH:
        headers = {"WWW-Authenticate": "Bearer"}

    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        body = {"error": exc.kind.value, "message": "Internal server error"}
    else:
        body = exc.to_dict()
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": ErrorKind.VALIDATION.value,
            "message": "Invalid request",
            "details": {"errors": errors},
        },
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": ErrorKind.INTERNAL.value, "message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskManagerError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
