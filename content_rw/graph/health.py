"""Neo4j graph health check utilities."""

import logging
from datetime import UTC, datetime
from typing import Any

from content_rw.core.config import settings
from content_rw.graph.neo4j_client import ping

logger = logging.getLogger(__name__)

CONNECTIVITY_CHECK_ID = "check-connectivity-to-neo4j"


def get_connectivity_check() -> dict[str, Any]:
    """
    Run the Neo4j connectivity check.

    Returns:
        Check result with ok flag, latency and failure output
    """
    is_reachable, latency_ms, details = ping()
    if not is_reachable:
        logger.warning(f"Neo4j connectivity check failed: {details.get('error', 'unreachable')}")

    return {
        "id": CONNECTIVITY_CHECK_ID,
        "name": "Check connectivity to Neo4j",
        "ok": is_reachable,
        "severity": 1,
        "businessImpact": "Cannot read/write content via this writer",
        "technicalSummary": (
            f"Cannot connect to Neo4j instance {settings.NEO4J_URI} with something written to it"
        ),
        "panicGuide": f"https://runbooks.in.ft.com/{settings.APP_SYSTEM_CODE}",
        "checkOutput": "OK" if is_reachable else details.get("error", "unreachable"),
        "latency_ms": latency_ms,
        "lastUpdated": datetime.now(UTC).isoformat(),
    }


def get_graph_health() -> dict[str, Any]:
    """
    Get the service health report.

    Returns:
        Dictionary with:
        - schemaVersion, systemCode, name, description
        - timeoutSeconds: time allowed for the checks to run
        - checks: list of check results
        - ok: True when every check passed
    """
    checks = [get_connectivity_check()]
    return {
        "schemaVersion": 1,
        "systemCode": settings.APP_SYSTEM_CODE,
        "name": f"{settings.APP_NAME} ServiceModule",
        "description": "Writes 'content' to Neo4j, usually as part of a bulk upload done on a schedule",
        "timeoutSeconds": settings.HEALTH_CHECK_TIMEOUT_SECONDS,
        "checks": checks,
        "ok": all(check["ok"] for check in checks),
    }
