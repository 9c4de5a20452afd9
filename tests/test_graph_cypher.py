"""Tests for Cypher query builders."""

import pytest

from content_rw.graph.cypher import (
    clear_collection_node,
    count_content,
    delete_content_relationships,
    format_labels,
    read_content,
    remove_node,
    upsert_content_package_relation,
    upsert_story_package_relation,
    write_content_node,
)


class TestFormatLabels:
    """Test label expression rendering."""

    def test_single_label(self):
        assert format_labels(["Content"]) == ":`Content`"

    def test_multiple_labels_keep_order(self):
        assert format_labels(["Content", "ContentPackage", "LiveBlogPackage"]) == (
            ":`Content`:`ContentPackage`:`LiveBlogPackage`"
        )

    def test_backticks_are_escaped(self):
        """A type value cannot break out of the label expression."""
        assert format_labels(["Bad` SET n.x = 1 //"]) == ":`Bad`` SET n.x = 1 //`"

    def test_empty_labels_rejected(self):
        with pytest.raises(ValueError, match="non-empty label"):
            format_labels([])
        with pytest.raises(ValueError, match="non-empty label"):
            format_labels(["Content", ""])


class TestContentQueries:
    """Test content write/read/delete builders."""

    def test_delete_content_relationships(self):
        cypher, params = delete_content_relationships("uuid-1")

        assert "IS_CURATED_FOR]->(t)" in cypher
        assert "(t)-[rel2:CONTAINS]->" in cypher
        assert "DELETE rel1, rel2" in cypher
        assert "DETACH" not in cypher
        assert params == {"uuid": "uuid-1"}

    def test_upsert_story_package_relation_direction(self):
        cypher, params = upsert_story_package_relation("content-1", "sp-1")

        assert "MERGE (sp)-[:IS_CURATED_FOR]->(c)" in cypher
        assert params == {"package_uuid": "sp-1", "content_uuid": "content-1"}

    def test_upsert_content_package_relation_direction(self):
        cypher, params = upsert_content_package_relation("content-1", "cp-1")

        assert "MERGE (c)-[:CONTAINS]->(cp)" in cypher
        assert params == {"package_uuid": "cp-1", "content_uuid": "content-1"}

    def test_write_content_node_replaces_properties(self):
        props = {"uuid": "content-1", "title": "Title", "prefLabel": "Title"}
        cypher, params = write_content_node("content-1", props, ["Content", "Article"])

        assert "MERGE (n:Thing {uuid: $uuid})" in cypher
        assert "SET n = $props" in cypher
        assert "SET n:`Content`:`Article`" in cypher
        assert params == {"uuid": "content-1", "props": props}

    def test_write_content_node_missing_uuid(self):
        with pytest.raises(ValueError, match="uuid is required"):
            write_content_node("", {"uuid": ""}, ["Content"])

    def test_write_content_node_without_stale_labels_has_no_remove(self):
        cypher, _ = write_content_node("content-1", {"uuid": "content-1"}, ["Content"])

        assert "REMOVE" not in cypher

    def test_write_content_node_removes_stale_labels_before_setting(self):
        """Article with a package rewritten as Video loses Article and ContentPackage."""
        cypher, params = write_content_node(
            "content-1",
            {"uuid": "content-1"},
            ["Content", "Video"],
            ["Article", "ContentPackage"],
        )

        assert "REMOVE n:`Article`:`ContentPackage`" in cypher
        assert cypher.index("REMOVE n") < cypher.index("SET n = $props")
        assert cypher.index("SET n = $props") < cypher.index("SET n:`Content`:`Video`")
        assert params == {"uuid": "content-1", "props": {"uuid": "content-1"}}

    def test_write_content_node_escapes_stale_labels(self):
        cypher, _ = write_content_node("content-1", {"uuid": "content-1"}, ["Content"], ["Odd`Type"])

        assert "REMOVE n:`Odd``Type`" in cypher

    def test_relationship_cleanup_covers_both_package_kinds(self):
        """Both link kinds written for a document are dropped before the next write."""
        cleanup, _ = delete_content_relationships("content-1")
        story, _ = upsert_story_package_relation("content-1", "sp-1")
        package, _ = upsert_content_package_relation("content-1", "cp-1")

        assert ":IS_CURATED_FOR]" in story and "rel1:IS_CURATED_FOR" in cleanup
        assert ":CONTAINS]" in package and "rel2:CONTAINS" in cleanup


    def test_read_content(self):
        cypher, params = read_content("content-1")

        assert "OPTIONAL MATCH (n:Content {uuid: $uuid})" in cypher
        assert "sp.uuid AS storyPackage" in cypher
        assert "cp.uuid AS contentPackage" in cypher
        assert params == {"uuid": "content-1"}

    def test_clear_collection_node_spares_collections(self):
        """Every relationship of the contained node is counted, not just CONTAINS."""
        cypher, params = clear_collection_node("cp-1")

        assert "(p:ContentPackage {uuid: $uuid})-[:CONTAINS]->(cc:Thing)" in cypher
        assert "OPTIONAL MATCH (cc)-[other]-()" in cypher
        assert "count(other) AS rel_count" in cypher
        assert "rel_count = 1" in cypher
        assert "NOT cc:ContentCollection" in cypher
        assert "DETACH DELETE cc" in cypher
        assert params == {"uuid": "cp-1"}

    def test_remove_node(self):
        cypher, params = remove_node("content-1")

        assert "MATCH (p:Thing {uuid: $uuid})" in cypher
        assert "DETACH DELETE p" in cypher
        assert params == {"uuid": "content-1"}

    def test_count_content(self):
        cypher, params = count_content()

        assert cypher == "MATCH (n:Content) RETURN count(n) AS count"
        assert params == {}
