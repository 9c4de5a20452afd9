"""Error handling and consistent error response format."""

import logging
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from neo4j.exceptions import ConstraintError, ServiceUnavailable
from pydantic import BaseModel

from content_rw.content.errors import InvalidPublishedDateError
from content_rw.policy.errors import PolicyAgentError

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error_code: str
    message: str
    details: Any | None = None
    request_id: str | None = None


class AppError(HTTPException):
    """Application error with standardized error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        """Initialize application error."""
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


def get_request_id(request: Request) -> str | None:
    """Get request ID from request state."""
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=code,
            message=message,
            details=details,
            request_id=get_request_id(request),
        ).model_dump(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle undecodable request bodies (400)."""
    details = [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "issue": error.get("msg", "Validation error"),
            "type": error.get("type", "validation_error"),
        }
        for error in exc.errors()
    ]
    return _error_response(
        request, status.HTTP_400_BAD_REQUEST, "INVALID_BODY", "Invalid request data", details
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    if isinstance(exc, AppError):
        return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)

    if isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = str(exc.detail)
    return _error_response(request, exc.status_code, "HTTP_ERROR", message)


async def invalid_published_date_handler(
    request: Request, exc: InvalidPublishedDateError
) -> JSONResponse:
    """Handle malformed publishedDate values (400)."""
    return _error_response(
        request, status.HTTP_400_BAD_REQUEST, "INVALID_PUBLISHED_DATE", str(exc)
    )


async def policy_agent_exception_handler(request: Request, exc: PolicyAgentError) -> JSONResponse:
    """Handle policy agent failures (500)."""
    logger.error(
        f"Policy agent failure: {exc}",
        extra={"request_id": get_request_id(request)},
    )
    return _error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "POLICY_AGENT_ERROR", str(exc)
    )


async def store_unavailable_handler(request: Request, exc: ServiceUnavailable) -> JSONResponse:
    """Handle Neo4j being unreachable (503)."""
    logger.error(
        f"Neo4j unavailable: {exc}",
        extra={"request_id": get_request_id(request)},
    )
    return _error_response(
        request, status.HTTP_503_SERVICE_UNAVAILABLE, "STORE_UNAVAILABLE", "Neo4j is unreachable"
    )


async def constraint_exception_handler(request: Request, exc: ConstraintError) -> JSONResponse:
    """Handle Neo4j constraint violations (409)."""
    return _error_response(request, status.HTTP_409_CONFLICT, "CONFLICT", str(exc))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions (500)."""
    from content_rw.core.config import settings

    logger.error(
        f"Unhandled error: {exc}",
        extra={"request_id": get_request_id(request)},
        exc_info=exc,
    )

    # In production, don't expose internal error details
    if settings.ENV == "prod":
        message = "An internal server error occurred"
        details = None
    else:
        message = str(exc)
        details = {"type": type(exc).__name__}

    return _error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", message, details
    )
