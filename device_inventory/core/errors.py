"""Error taxonomy and the handlers that turn it into JSON responses.

Every failure reaches the browser as ``{"error": "<message>"}``. Domain code
raises the exceptions below; ``register_exception_handlers`` teaches the
FastAPI app how to render each of them, plus the framework's own 404/405 and
request validation errors.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

LOGGER = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"
ROUTE_NOT_FOUND_MESSAGE = "Endpoint not found"


class InventoryError(Exception):
    """Base class for failures the API reports to its callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def payload(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Name, type, and status are required"


class NotFound(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Device not found"


class MalformedInput(InventoryError):
    """Structurally invalid CSV; ``row`` is the 1-based data row when known."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Malformed CSV input"

    def __init__(self, message: str | None = None, *, row: int | None = None) -> None:
        self.row = row
        super().__init__(message)

    def payload(self) -> dict[str, Any]:
        body = super().payload()
        if self.row is not None:
            body["row"] = self.row
        return body


class StorageError(InventoryError):
    """The underlying store rejected a statement. Detail stays server-side."""


class ErrorResponse(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"error": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


async def inventory_error_handler(request: Request, exc: InventoryError):
    if isinstance(exc, StorageError):
        LOGGER.error(
            "storage.error",
            exc_info=exc.__cause__ or exc,
            extra={"extra_data": {"path": request.url.path, "detail": exc.message}},
        )
        return ErrorResponse(status_code=exc.status_code, message=GENERIC_ERROR_MESSAGE)
    return JSONResponse(exc.payload(), status_code=exc.status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Express-style routing: an unknown path and a known path with the wrong
    # method both read as "no such endpoint".
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return ErrorResponse(status_code=status.HTTP_404_NOT_FOUND, message=ROUTE_NOT_FOUND_MESSAGE)
    detail = exc.detail
    message = detail if isinstance(detail, str) else GENERIC_ERROR_MESSAGE
    return ErrorResponse(status_code=exc.status_code, message=message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return ErrorResponse(status_code=status.HTTP_400_BAD_REQUEST, message="Invalid request", details=details)


async def unhandled_exception_handler(request: Request, exc: Exception):
    LOGGER.error(
        "request.failed",
        exc_info=exc,
        extra={"extra_data": {"method": request.method, "path": request.url.path}},
    )
    return ErrorResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
