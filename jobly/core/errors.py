"""
HTTP error taxonomy and the app-wide exception handlers.

Every error leaves the API as:

    {"error": {"message": <str or list of str>, "status": <int>}}

Handlers are registered on the FastAPI app by `register_exception_handlers`.
"""

import logging
from typing import List, Union

from fastapi import FastAPI, HTTPException, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

Message = Union[str, List[str]]


class AppError(HTTPException):
    """Base class for errors that map directly onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Message = "Internal Server Error", headers=None):
        super().__init__(status_code=self.status_code, detail=message, headers=headers)

    @property
    def message(self) -> Message:
        return self.detail


class BadRequestError(AppError):
    """400: malformed or invalid request data."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: Message = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(AppError):
    """401: a valid token is required."""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: Message = "Unauthorized"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AppError):
    """403: caller lacks the required role."""
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: Message = "Forbidden"):
        super().__init__(message)


class NotFoundError(AppError):
    """404: the referenced id or handle does not exist."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: Message = "Not Found"):
        super().__init__(message)


def error_body(message: Message, status_code: int) -> dict:
    return {"error": {"message": message, "status": status_code}}


def format_validation_error(error: dict) -> str:
    """
    Render one pydantic error as a readable line, e.g.
    ``body.salary: Input should be greater than or equal to 0``.
    """
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}" if location else error.get("msg", "invalid value")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Collect every schema violation into a single 400 response."""
    messages = [format_validation_error(err) for err in exc.errors()]
    logger.info(f"Rejected {request.method} {request.url.path}: {len(messages)} validation error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(messages, status.HTTP_400_BAD_REQUEST),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
