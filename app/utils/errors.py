"""
FitTrack API - Custom Exception Classes.

Exception hierarchy for application error handling, plus the FastAPI
handlers that render every failure as ``{"error": ..., "details": ...}``.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class FitTrackException(Exception):
    """
    Base exception class for FitTrack application.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error.
        detail: Additional error details.
        headers: Extra response headers.
    """

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        detail: Optional[Any] = None,
        headers: Optional[dict] = None
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        self.headers = headers
        super().__init__(self.message)


class NotFoundError(FitTrackException):
    """
    Exception raised when a resource is not found.

    Used when:
    - Meal, plan, list or conversation does not exist
    - Identifier is malformed
    """

    def __init__(
        self,
        message: str = "Resource not found",
        detail: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            status_code=404,
            detail=detail
        )


class ValidationError(FitTrackException):
    """
    Exception raised for input validation failures.

    Used when:
    - Missing required parameters
    - Invalid input format
    """

    def __init__(
        self,
        message: str = "Validation error",
        detail: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            status_code=400,
            detail=detail
        )


class RateLimitError(FitTrackException):
    """Exception raised when a caller exceeds its request allowance."""

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        retry_after: int = 60
    ):
        super().__init__(
            message=message,
            status_code=429,
            detail={"retry_after_seconds": retry_after},
            headers={"Retry-After": str(retry_after)}
        )


class UpstreamServiceError(FitTrackException):
    """
    Exception raised when a dependency fails and no fallback applies.

    Used when:
    - AI service is not configured
    - AI call fails on an endpoint without static fallback data
    - Database write fails
    """

    def __init__(
        self,
        message: str = "Upstream service failure",
        detail: Optional[Any] = None,
        status_code: int = 500
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            detail=detail
        )


def _error_body(message: str, detail: Optional[Any] = None) -> dict:
    body = {"error": message}
    if detail is not None and detail != message:
        body["details"] = detail
    return body


async def fittrack_exception_handler(request: Request, exc: FitTrackException) -> JSONResponse:
    """Render application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.detail),
        headers=exc.headers
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP exceptions (unknown routes, bad methods)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed or incomplete requests with 400."""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    missing = [d["field"] for d in details if d["message"] == "Field required"]
    message = f"Missing required fields: {', '.join(missing)}" if missing else "Invalid request"
    return JSONResponse(status_code=400, content=_error_body(message, details))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; the traceback goes to the log (and Sentry)."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the FitTrack error handlers to ``app``."""
    app.add_exception_handler(FitTrackException, fittrack_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
