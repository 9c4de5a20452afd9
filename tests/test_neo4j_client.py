"""Tests for the Neo4j client helpers."""

import pytest
from unittest.mock import MagicMock, patch

from neo4j.exceptions import ServiceUnavailable

from content_rw.graph import neo4j_client
from content_rw.graph.neo4j_client import ping, reset_driver, run_read, run_write, run_write_batch


def _counters(**overrides):
    values = {
        "nodes_created": 0,
        "nodes_deleted": 0,
        "relationships_created": 0,
        "relationships_deleted": 0,
        "properties_set": 0,
        "labels_added": 0,
        "labels_removed": 0,
    }
    values.update(overrides)
    return MagicMock(**values)


@pytest.fixture
def driver():
    """Driver mock whose managed transactions run against a tx mock."""
    mock_driver = MagicMock()
    session = mock_driver.session.return_value.__enter__.return_value
    tx = MagicMock()
    session.execute_read.side_effect = lambda fn, *args: fn(tx, *args)
    session.execute_write.side_effect = lambda fn, *args: fn(tx, *args)
    mock_driver.tx = tx
    with patch.object(neo4j_client, "_driver", mock_driver):
        yield mock_driver


class TestReadWrite:
    """Test read/write helpers."""

    def test_run_read_returns_record_dicts(self, driver):
        record = MagicMock()
        record.data.return_value = {"count": 3}
        driver.tx.run.return_value = [record]

        rows = run_read("MATCH (n:Content) RETURN count(n) AS count")

        assert rows == [{"count": 3}]
        driver.tx.run.assert_called_once_with("MATCH (n:Content) RETURN count(n) AS count", {})

    def test_run_write_returns_counters(self, driver):
        driver.tx.run.return_value.consume.return_value.counters = _counters(nodes_deleted=1)

        summary = run_write("MATCH (p:Thing {uuid: $uuid}) DETACH DELETE p", {"uuid": "x"})

        assert summary["nodes_deleted"] == 1
        assert summary["relationships_deleted"] == 0

    def test_run_write_batch_runs_in_order_in_one_transaction(self, driver):
        driver.tx.run.return_value.consume.return_value.counters = _counters()

        summaries = run_write_batch([("A", {"a": 1}), ("B", {"b": 2}), ("C", {})])

        assert len(summaries) == 3
        assert [call[0][0] for call in driver.tx.run.call_args_list] == ["A", "B", "C"]
        session = driver.session.return_value.__enter__.return_value
        assert session.execute_write.call_count == 1

    def test_run_write_propagates_errors(self, driver):
        driver.tx.run.side_effect = ServiceUnavailable("down")

        with pytest.raises(ServiceUnavailable):
            run_write("RETURN 1")


class TestPing:
    """Test connectivity ping."""

    def test_ping_ok(self):
        with patch("content_rw.graph.neo4j_client.verify_connectivity"):
            ok, latency_ms, details = ping()

        assert ok is True
        assert latency_ms is not None
        assert details == {"reachable": True}

    def test_ping_unreachable(self):
        with patch(
            "content_rw.graph.neo4j_client.verify_connectivity",
            side_effect=ServiceUnavailable("connection refused"),
        ):
            ok, latency_ms, details = ping()

        assert ok is False
        assert latency_ms is None
        assert details["reachable"] is False
        assert "connection refused" in details["error"]

    def test_reset_driver_closes(self):
        mock_driver = MagicMock()
        with patch.object(neo4j_client, "_driver", mock_driver):
            reset_driver()
            mock_driver.close.assert_called_once()
            assert neo4j_client._driver is None
