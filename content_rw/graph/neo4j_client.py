"""Neo4j client singleton.

Unlike a shadow read model, this writer owns its data: every driver error is
propagated to the caller unchanged.
"""

import logging
import time
from typing import Any

from neo4j import Driver, GraphDatabase, ManagedTransaction
from neo4j.exceptions import AuthError, ServiceUnavailable

from content_rw.core.config import settings

logger = logging.getLogger(__name__)

Statement = tuple[str, dict[str, Any]]

# Singleton driver instance
_driver: Driver | None = None


def get_driver() -> Driver:
    """
    Get Neo4j driver singleton, creating it on first use.

    Returns:
        Driver instance

    Raises:
        neo4j.exceptions.ConfigurationError: If the URI or auth settings are invalid
    """
    global _driver

    if _driver is None:
        auth = None
        if settings.NEO4J_PASSWORD:
            auth = (settings.NEO4J_USERNAME, settings.NEO4J_PASSWORD)
        _driver = GraphDatabase.driver(
            settings.NEO4J_URI,
            auth=auth,
            max_connection_lifetime=settings.NEO4J_MAX_CONNECTION_LIFETIME,
        )
        logger.info(f"Neo4j driver initialized: {settings.NEO4J_URI}")

    return _driver


def reset_driver() -> None:
    """Close and forget the driver singleton (shutdown and tests)."""
    global _driver
    if _driver is not None:
        try:
            _driver.close()
        except Exception as e:
            logger.warning(f"Could not close the Neo4j driver: {e}")
    _driver = None


def verify_connectivity() -> None:
    """
    Check that a writable Neo4j server is reachable.

    Raises:
        neo4j.exceptions.ServiceUnavailable: If no server can be reached
    """
    get_driver().verify_connectivity()


def ping() -> tuple[bool, int | None, dict[str, Any]]:
    """
    Ping Neo4j to check connectivity.

    Returns:
        Tuple of (ok, latency_ms, details)
    """
    try:
        start = time.time()
        verify_connectivity()
        latency_ms = int((time.time() - start) * 1000)
        return True, latency_ms, {"reachable": True}
    except (ServiceUnavailable, AuthError) as e:
        logger.debug(f"Neo4j ping failed: {e}")
        return False, None, {"reachable": False, "error": str(e)}
    except Exception as e:
        logger.warning(f"Unexpected error during Neo4j ping: {e}")
        return False, None, {"reachable": False, "error": str(e)}


def run_read(cypher: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
    """
    Execute a read-only Cypher query.

    Args:
        cypher: Cypher query string
        params: Query parameters

    Returns:
        List of result records (as dictionaries); empty when nothing matched
    """
    with get_driver().session(database=settings.NEO4J_DATABASE) as session:
        return session.execute_read(_collect_records, cypher, params or {})


def run_write(cypher: str, params: dict[str, Any] | None = None) -> dict[str, int]:
    """
    Execute a single write Cypher query in its own transaction.

    Args:
        cypher: Cypher query string
        params: Query parameters

    Returns:
        Write summary counters (nodes_deleted, labels_removed, ...)
    """
    return run_write_batch([(cypher, params or {})])[0]


def run_write_batch(statements: list[Statement]) -> list[dict[str, int]]:
    """
    Execute several write queries in one transaction.

    Statements run in list order inside the transaction; either all of them
    commit or none do.

    Args:
        statements: List of (cypher, params) tuples

    Returns:
        Write summary counters, one dict per statement
    """
    with get_driver().session(database=settings.NEO4J_DATABASE) as session:
        return session.execute_write(_run_statements, statements)


def _collect_records(tx: ManagedTransaction, cypher: str, params: dict[str, Any]) -> list[dict[str, Any]]:
    result = tx.run(cypher, params)
    return [record.data() for record in result]


def _run_statements(tx: ManagedTransaction, statements: list[Statement]) -> list[dict[str, int]]:
    summaries = []
    for cypher, params in statements:
        summary = tx.run(cypher, params).consume()
        summaries.append(_counters_to_dict(summary.counters))
    return summaries


def _counters_to_dict(counters: Any) -> dict[str, int]:
    return {
        "nodes_created": counters.nodes_created,
        "nodes_deleted": counters.nodes_deleted,
        "relationships_created": counters.relationships_created,
        "relationships_deleted": counters.relationships_deleted,
        "properties_set": counters.properties_set,
        "labels_added": counters.labels_added,
        "labels_removed": counters.labels_removed,
    }
