"""Transaction ID middleware and utilities."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from content_rw.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


def new_transaction_id() -> str:
    """Generate a transaction ID in the publishing pipeline's tid_ format."""
    return f"tid_{uuid.uuid4().hex[:10]}"


def get_request_id(request: Request) -> str:
    """Get transaction ID from request state."""
    return getattr(request.state, "request_id", "unknown")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to propagate or generate transaction IDs."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and add transaction ID."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_transaction_id()
        request.state.request_id = request_id

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "Request failed",
                extra={
                    "transaction_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": 500,
                    "latency_ms": elapsed_ms,
                    "error": str(e),
                },
                exc_info=True,
            )
            raise

        elapsed_ms = int((time.time() - start_time) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "Request completed",
            extra={
                "transaction_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_ms": elapsed_ms,
            },
        )

        return response
