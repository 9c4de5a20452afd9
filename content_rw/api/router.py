"""API router - includes all endpoints."""

from fastapi import APIRouter

from content_rw.api.endpoints import content, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(content.router, prefix="/content", tags=["Content"])
