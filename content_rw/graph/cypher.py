"""Cypher query builders for content graph operations.

Every builder returns a ``(cypher, params)`` tuple; nothing here talks to
the database.
"""

from typing import Any

CURATED_FOR = "IS_CURATED_FOR"
CONTAINS = "CONTAINS"


def format_labels(labels: list[str]) -> str:
    """
    Render a label list as a Cypher label expression (``:`A`:`B```).

    Labels cannot be parameterised, so each one is backtick-quoted with
    embedded backticks doubled.

    Raises:
        ValueError: If labels is empty or contains an empty label
    """
    if not labels or any(not label for label in labels):
        raise ValueError("at least one non-empty label is required")
    return "".join(":`{}`".format(label.replace("`", "``")) for label in labels)


def delete_content_relationships(uuid: str) -> tuple[str, dict[str, Any]]:
    """
    Build Cypher query removing the package relationships this writer owns.

    Removes incoming IS_CURATED_FOR edges (from story packages) and outgoing
    CONTAINS edges (to content packages). Other relationships are untouched.
    """
    cypher = f"""
    MATCH (t:Thing {{uuid: $uuid}})
    OPTIONAL MATCH (:Thing)-[rel1:{CURATED_FOR}]->(t)
    OPTIONAL MATCH (t)-[rel2:{CONTAINS}]->(:Thing)
    DELETE rel1, rel2
    """
    return cypher, {"uuid": uuid}


def upsert_story_package_relation(content_uuid: str, package_uuid: str) -> tuple[str, dict[str, Any]]:
    """Build Cypher query linking a story package to the content it curates."""
    cypher = f"""
    MERGE (sp:Thing {{uuid: $package_uuid}})
    MERGE (c:Thing {{uuid: $content_uuid}})
    MERGE (sp)-[:{CURATED_FOR}]->(c)
    """
    return cypher, {"package_uuid": package_uuid, "content_uuid": content_uuid}


def upsert_content_package_relation(content_uuid: str, package_uuid: str) -> tuple[str, dict[str, Any]]:
    """Build Cypher query linking content to the content package it contains."""
    cypher = f"""
    MERGE (cp:Thing {{uuid: $package_uuid}})
    MERGE (c:Thing {{uuid: $content_uuid}})
    MERGE (c)-[:{CONTAINS}]->(cp)
    """
    return cypher, {"package_uuid": package_uuid, "content_uuid": content_uuid}


def write_content_node(
    uuid: str,
    props: dict[str, Any],
    labels: list[str],
    stale_labels: list[str] | None = None,
) -> tuple[str, dict[str, Any]]:
    """
    Build Cypher query upserting a content node.

    The property map replaces every stored property (``SET n = $props``) so
    fields dropped from the document do not survive. ``stale_labels`` are
    removed before ``labels`` are set, so a label in both is kept.

    Raises:
        ValueError: If uuid is missing
    """
    if not uuid:
        raise ValueError("uuid is required for Content node")

    remove_clause = f"REMOVE n{format_labels(stale_labels)}\n    " if stale_labels else ""
    cypher = f"""
    MERGE (n:Thing {{uuid: $uuid}})
    {remove_clause}SET n = $props
    SET n{format_labels(labels)}
    """
    return cypher, {"uuid": uuid, "props": props}


def read_content(uuid: str) -> tuple[str, dict[str, Any]]:
    """
    Build Cypher query reading a content node with its package links.

    Always yields at least one row; ``uuid`` is null when no node matched.
    """
    cypher = f"""
    OPTIONAL MATCH (n:Content {{uuid: $uuid}})
    OPTIONAL MATCH (sp:Thing)-[:{CURATED_FOR}]->(n)
    OPTIONAL MATCH (n)-[:{CONTAINS}]->(cp:Thing)
    RETURN n.uuid AS uuid,
        n.title AS title,
        n.publishedDate AS publishedDate,
        n.publication AS publication,
        sp.uuid AS storyPackage,
        cp.uuid AS contentPackage
    """
    return cypher, {"uuid": uuid}


def clear_collection_node(uuid: str) -> tuple[str, dict[str, Any]]:
    """
    Build Cypher query removing nodes a deleted content collection left behind.

    When a content collection is deleted elsewhere its label is removed but
    the bare node stays, still contained by the package. A contained node is
    detach-deleted when the CONTAINS edge is its only relationship and it is
    not (or no longer) a ContentCollection.
    """
    cypher = f"""
    MATCH (p:ContentPackage {{uuid: $uuid}})-[:{CONTAINS}]->(cc:Thing)
    OPTIONAL MATCH (cc)-[other]-()
    WITH cc, count(other) AS rel_count
    WHERE rel_count = 1 AND NOT cc:ContentCollection
    DETACH DELETE cc
    """
    return cypher, {"uuid": uuid}


def remove_node(uuid: str) -> tuple[str, dict[str, Any]]:
    """Build Cypher query detach-deleting the node with the given uuid."""
    cypher = """
    MATCH (p:Thing {uuid: $uuid})
    DETACH DELETE p
    """
    return cypher, {"uuid": uuid}


def count_content() -> tuple[str, dict[str, Any]]:
    """Build Cypher query counting Content nodes."""
    return "MATCH (n:Content) RETURN count(n) AS count", {}
