"""
Error types raised by the service layer and their HTTP translation.

Services never build HTTP responses themselves.  They raise one of the
``DirectoryError`` subclasses below and the handlers registered by
``register_exception_handlers`` turn them into ``{"error": ...}``
JSON bodies with the matching status code.  Storage failures and
unexpected exceptions are logged with their traceback while the client
only receives a generic message.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(DirectoryError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, fields: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.fields = fields or []

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        if self.fields:
            body["fields"] = self.fields
        return body


class ConflictError(DirectoryError):
    """The email address is already used by another consultant."""

    status_code = status.HTTP_409_CONFLICT


class NotFoundError(DirectoryError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(DirectoryError):
    """The operation is not allowed on this record (e.g. built-in delete)."""

    status_code = status.HTTP_403_FORBIDDEN


class StorageError(DirectoryError):
    """The underlying SQLite store failed.

    ``message`` holds the internal description for the logs; clients
    only ever see ``public_message``.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Database error"

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.public_message}


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on ``app``."""

    @app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
        if isinstance(exc, StorageError):
            logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = []
        for error in exc.errors():
            # ``loc`` looks like ("body", "regions", 0) or ("path", "consultant_id")
            loc = [str(part) for part in error.get("loc", ())[1:]]
            name = ".".join(loc) or str(error.get("loc", ("body",))[0])
            if name not in fields:
                fields.append(name)
        logger.warning("Rejected request to %s %s: invalid %s", request.method, request.url.path, fields)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "fields": fields},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Endpoint not found"
        else:
            message = str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
