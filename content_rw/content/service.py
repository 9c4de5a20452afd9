"""Content service: projects content documents onto the Neo4j graph.

A content item is a ``Thing`` node keyed by uuid carrying the ``Content``
label, its own type as a label and, when it belongs to a content package,
``ContentPackage`` (plus ``LiveBlogPackage`` for live blogs). Story packages
curate content (``(sp)-[:IS_CURATED_FOR]->(content)``) and content points at
its package (``(content)-[:CONTAINS]->(cp)``).

Every write replaces the node's properties and the package relationships
owned by this service, so repeated or partial updates converge on the
latest document.
"""

import logging
import re
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from content_rw.content.errors import InvalidPublishedDateError
from content_rw.content.model import Content
from content_rw.graph.cypher import (
    clear_collection_node,
    count_content,
    delete_content_relationships,
    read_content,
    remove_node,
    upsert_content_package_relation,
    upsert_story_package_relation,
    write_content_node,
)
from content_rw.graph.neo4j_client import run_read, run_write, run_write_batch, verify_connectivity
from content_rw.graph.schema import ensure_constraints
from content_rw.policy.decision import SpecialContentDecision

logger = logging.getLogger(__name__)

CONTENT_LABEL = "Content"
CONTENT_PACKAGE = "ContentPackage"
LIVE_BLOG_PACKAGE = "LiveBlogPackage"
LIVE_BLOG_POST = "LiveBlogPost"

# Types persisted even without a body; anything else needs one
CONTENT_TYPES_WITH_NO_BODY = frozenset(
    {
        "Content",
        "Article",
        "Video",
        "Graphic",
        "Audio",
        CONTENT_PACKAGE,
        LIVE_BLOG_PACKAGE,
        LIVE_BLOG_POST,
        "LiveEvent",
    }
)

# Types never copied onto the node as their own label
GENERIC_LABEL_TYPES = frozenset({CONTENT_LABEL, CONTENT_PACKAGE, LIVE_BLOG_PACKAGE})

# Labels this writer sets and may therefore take away again on update
OWNED_LABELS = (CONTENT_TYPES_WITH_NO_BODY | {CONTENT_PACKAGE, LIVE_BLOG_PACKAGE}) - {CONTENT_LABEL}

_RFC3339 = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class SpecialContentPolicy(Protocol):
    def evaluate_special_content_policy(self, attributes: dict[str, Any]) -> SpecialContentDecision: ...


def published_date_epoch(published_date: str) -> int:
    """
    Convert an RFC3339 timestamp to whole seconds since the Unix epoch.

    Fractional seconds are dropped (floored), matching the stored
    ``publishedDateEpoch`` convention.

    Raises:
        InvalidPublishedDateError: If the value is not RFC3339
    """
    match = _RFC3339.match(published_date)
    if match is None:
        raise InvalidPublishedDateError(published_date)

    date_part, time_part, fraction, offset = match.groups()
    micros = (fraction or "")[:6].ljust(6, "0")
    if offset in ("Z", "z"):
        offset = "+00:00"
    try:
        parsed = datetime.fromisoformat(f"{date_part}T{time_part}.{micros}{offset}")
    except ValueError as e:
        raise InvalidPublishedDateError(published_date) from e
    return (parsed - UNIX_EPOCH) // timedelta(seconds=1)


def content_properties(content: Content) -> dict[str, Any]:
    """
    Build the complete node property map from a content document.

    Empty fields are left out so the wholesale ``SET n = $props`` removes any
    previously stored value.
    """
    props: dict[str, Any] = {"uuid": content.uuid}

    if content.title:
        props["title"] = content.title
        props["prefLabel"] = content.title

    if content.published_date:
        props["publishedDate"] = content.published_date
        props["publishedDateEpoch"] = published_date_epoch(content.published_date)

    if content.publication:
        props["publication"] = list(content.publication)

    return props


def content_labels(content: Content) -> list[str]:
    """Derive the labels a content node carries besides Thing."""
    labels = [CONTENT_LABEL]

    if content.type and content.type not in GENERIC_LABEL_TYPES:
        labels.append(content.type)

    if content.content_package:
        labels.append(CONTENT_PACKAGE)
        if content.type == LIVE_BLOG_PACKAGE:
            labels.append(LIVE_BLOG_PACKAGE)

    return labels


def stale_labels(labels: list[str]) -> list[str]:
    """Owned labels an earlier write may have set that the new label set drops."""
    return sorted(OWNED_LABELS.difference(labels))


def is_persistable(content: Content) -> bool:
    """Content needs a body unless its type is legitimately bodiless."""
    return bool(content.body) or content.type in CONTENT_TYPES_WITH_NO_BODY


class ContentService:
    """Read/write/delete content nodes in Neo4j."""

    def __init__(self, policy_agent: SpecialContentPolicy):
        self.policy_agent = policy_agent

    def initialise(self) -> None:
        """Ensure the Content.uuid uniqueness constraint exists."""
        ensure_constraints()

    def check(self) -> None:
        """Raise if Neo4j is not reachable and writable."""
        verify_connectivity()

    def read(self, uuid: str, transaction_id: str = "") -> tuple[Content, bool]:
        """
        Read a content item by uuid.

        Returns:
            Tuple of (content, found); an empty Content when not found
        """
        cypher, params = read_content(uuid)
        rows = run_read(cypher, params)

        # The OPTIONAL MATCH yields one all-null row for a missing node
        if not rows or not rows[0].get("uuid"):
            logger.debug(
                "Content not found",
                extra={"transaction_id": transaction_id, "uuid": uuid},
            )
            return Content(), False

        row = rows[0]
        content = Content(
            uuid=row["uuid"],
            title=row.get("title") or "",
            published_date=row.get("publishedDate") or "",
            publication=row.get("publication") or [],
            story_package=row.get("storyPackage") or "",
            content_package=row.get("contentPackage") or "",
        )
        return content, True

    def write(self, content: Content, transaction_id: str = "") -> None:
        """
        Write a content item, replacing its properties and package links.

        Bodiless content of a type that needs a body, and content the policy
        agent flags as special, is skipped silently.

        Raises:
            InvalidPublishedDateError: If publishedDate is not RFC3339
            PolicyAgentError: If the special content policy cannot be evaluated
        """
        if not is_persistable(content):
            logger.debug(
                "Skipping content without body",
                extra={"transaction_id": transaction_id, "uuid": content.uuid, "content_type": content.type},
            )
            return

        decision = self.policy_agent.evaluate_special_content_policy(
            {"editorialDesk": content.editorial_desk}
        )
        if decision.is_special_content:
            logger.info(
                f"Content with ID {content.uuid} was marked as special content, it would not be persisted.",
                extra={"transaction_id": transaction_id, "uuid": content.uuid},
            )
            return

        props = content_properties(content)
        statements = [delete_content_relationships(content.uuid)]

        if content.story_package:
            statements.append(upsert_story_package_relation(content.uuid, content.story_package))

        if content.content_package:
            statements.append(upsert_content_package_relation(content.uuid, content.content_package))

        labels = content_labels(content)
        statements.append(write_content_node(content.uuid, props, labels, stale_labels(labels)))

        event = {
            "event": "SaveNeo4j",
            "monitoring_event": True,
            "transaction_id": transaction_id,
            "uuid": content.uuid,
            "content_type": content.type,
        }
        try:
            run_write_batch(statements)
        except Exception:
            logger.error("Failed to save content", extra=event, exc_info=True)
            raise
        logger.info("Content successfully saved", extra=event)

    def delete(self, uuid: str, transaction_id: str = "") -> bool:
        """
        Delete a content item and every relationship touching it.

        Runs two transactions: the first removes nodes left dangling under a
        content package by a deleted content collection, the second
        detach-deletes the node itself. They are separate because the first
        can only find the dangling node while the package still exists; the
        pair is not atomic.

        Returns:
            True if a node was deleted
        """
        run_write(*clear_collection_node(uuid))
        summary = run_write(*remove_node(uuid))

        deleted = summary.get("nodes_deleted", 0) > 0
        logger.info(
            "Content delete processed",
            extra={"transaction_id": transaction_id, "uuid": uuid, "deleted": deleted},
        )
        return deleted

    def count(self) -> int:
        """Count Content nodes."""
        cypher, params = count_content()
        rows = run_read(cypher, params)
        if not rows:
            return 0
        return int(rows[0].get("count") or 0)
