"""Neo4j graph database module for content nodes."""

from content_rw.graph.neo4j_client import (
    get_driver,
    ping,
    reset_driver,
    run_read,
    run_write,
    run_write_batch,
    verify_connectivity,
)
from content_rw.graph.schema import ensure_constraints
from content_rw.graph.health import get_graph_health

__all__ = [
    "get_driver",
    "ping",
    "reset_driver",
    "run_read",
    "run_write",
    "run_write_batch",
    "verify_connectivity",
    "ensure_constraints",
    "get_graph_health",
]
