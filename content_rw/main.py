"""FastAPI application factory and main entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from neo4j.exceptions import ConstraintError, ServiceUnavailable

from content_rw.api.dependencies import get_content_service
from content_rw.api.router import api_router
from content_rw.common.request_id import RequestIDMiddleware
from content_rw.content.errors import InvalidPublishedDateError
from content_rw.core.config import settings
from content_rw.core.errors import (
    constraint_exception_handler,
    general_exception_handler,
    http_exception_handler,
    invalid_published_date_handler,
    policy_agent_exception_handler,
    store_unavailable_handler,
    validation_exception_handler,
)
from content_rw.core.logging import setup_logging
from content_rw.graph.neo4j_client import reset_driver
from content_rw.policy.errors import PolicyAgentError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info(
        "Application starting...",
        extra={
            "app_name": settings.APP_NAME,
            "app_system_code": settings.APP_SYSTEM_CODE,
            "neo4j_uri": settings.NEO4J_URI,
            "port": settings.APP_PORT,
        },
    )
    get_content_service().initialise()
    yield
    # Shutdown
    reset_driver()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description=settings.APP_DESCRIPTION,
        openapi_url="/__api",
        docs_url="/__docs" if settings.ENV != "prod" else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    # Add exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(InvalidPublishedDateError, invalid_published_date_handler)
    app.add_exception_handler(PolicyAgentError, policy_agent_exception_handler)
    app.add_exception_handler(ServiceUnavailable, store_unavailable_handler)
    app.add_exception_handler(ConstraintError, constraint_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router)

    return app


def run_server() -> None:
    """Console entry point: serve the application with uvicorn."""
    uvicorn.run(
        "content_rw.main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=False,
        log_config=None,
    )


# Create app instance
app = create_app()
