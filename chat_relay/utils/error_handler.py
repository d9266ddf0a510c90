"""Error handling utilities and custom exceptions.

Every failure of the relay pipeline is raised as a :class:`RelayError`
subclass.  Each subclass fixes the HTTP status and the short message
returned to the client; the ``detail`` string is for the logs only.
"""

from __future__ import annotations

from typing import Sequence

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from ..models.chat_response import ErrorResponse


class RelayError(Exception):
    """Base class for failures mapped to an HTTP error response."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.public_message
        super().__init__(self.detail)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class MethodNotAllowed(RelayError):
    status_code = 405
    public_message = "Method Not Allowed"

    def __init__(self, method: str, allowed_methods: Sequence[str]) -> None:
        self.method = method
        self.allowed_methods = tuple(allowed_methods)
        super().__init__(f"Method {method} not allowed")

    @property
    def headers(self) -> dict[str, str]:
        return {"Allow": ", ".join(self.allowed_methods)}


class InvalidRequest(RelayError):
    status_code = 400
    public_message = "Missing required fields"


class InvalidJSONBody(InvalidRequest):
    public_message = "Invalid JSON body"


class UpstreamUnreachable(RelayError):
    public_message = "Completion API unreachable"


class UpstreamInvalidResponse(RelayError):
    public_message = "Invalid completion response"


class UpstreamFormatError(RelayError):
    public_message = "Unexpected completion response format"


class UpstreamError(RelayError):
    """Completion API answered with a non-2xx status."""

    public_message = "Completion API error"

    def __init__(self, upstream_status: int, upstream_body: str) -> None:
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        super().__init__(f"Completion API returned HTTP {upstream_status}")


class PersistenceError(RelayError):
    public_message = "Failed to save messages"


class InternalError(RelayError):
    public_message = "Internal server error"


async def relay_exception_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Convert a RelayError into its JSON error response."""
    if exc.status_code >= 500:
        logger.error(
            "{} on {} {}: {}",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.detail,
        )
    else:
        logger.warning(
            "{} on {} {}: {}",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.detail,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.public_message).model_dump(),
        headers=exc.headers,
    )
