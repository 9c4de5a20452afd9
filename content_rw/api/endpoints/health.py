"""Health and good-to-go endpoints."""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from content_rw.graph.health import get_connectivity_check, get_graph_health

router = APIRouter(tags=["Health"])


@router.get(
    "/__health",
    summary="Health check",
    description="Runs every health check and reports the individual results.",
)
def health_check() -> dict[str, Any]:
    """Health check endpoint; always 200, failures are reported in the body."""
    return get_graph_health()


@router.get(
    "/__gtg",
    response_class=PlainTextResponse,
    summary="Good to go",
    description="Returns 200 when the service can serve traffic, 503 otherwise.",
)
def good_to_go() -> PlainTextResponse:
    """Good-to-go endpoint - checks Neo4j connectivity."""
    check = get_connectivity_check()
    if not check["ok"]:
        return PlainTextResponse(check["checkOutput"], status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return PlainTextResponse("OK")
