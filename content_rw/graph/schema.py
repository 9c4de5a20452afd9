"""Neo4j schema management (constraints)."""

import logging
from typing import Any

from content_rw.graph.neo4j_client import run_write

logger = logging.getLogger(__name__)

# constraint name -> (label, property)
UNIQUE_CONSTRAINTS: dict[str, tuple[str, str]] = {
    "content_uuid_unique": ("Content", "uuid"),
}


def ensure_constraints() -> dict[str, Any]:
    """
    Ensure Neo4j uniqueness constraints exist (idempotent).

    Creates:
    - UNIQUE constraint on Content.uuid

    Returns:
        Dictionary listing the constraints created or verified

    Raises:
        neo4j.exceptions.Neo4jError: If a constraint cannot be created
    """
    results: dict[str, Any] = {"constraints_created": []}

    try:
        for constraint_name, (label, property_name) in UNIQUE_CONSTRAINTS.items():
            # Neo4j 5.x syntax, IF NOT EXISTS makes it safe on every start
            constraint_cypher = f"""
            CREATE CONSTRAINT {constraint_name} IF NOT EXISTS
            FOR (n:{label})
            REQUIRE n.{property_name} IS UNIQUE
            """
            run_write(constraint_cypher)
            results["constraints_created"].append(constraint_name)
            logger.info(f"Created/verified constraint: {constraint_name}")
    except Exception as e:
        logger.error(f"Failed to create Neo4j schema: {e}", exc_info=True)
        raise

    return results
