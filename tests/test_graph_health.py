"""Tests for Neo4j health checks."""

from unittest.mock import patch

from content_rw.core.config import settings
from content_rw.graph.health import CONNECTIVITY_CHECK_ID, get_graph_health


class TestGraphHealth:
    """Test graph health report."""

    def test_health_reachable(self):
        """Test health when Neo4j is reachable."""
        with patch("content_rw.graph.health.ping", return_value=(True, 10, {"reachable": True})):
            health = get_graph_health()

            assert health["ok"] is True
            assert health["systemCode"] == settings.APP_SYSTEM_CODE
            assert len(health["checks"]) == 1
            check = health["checks"][0]
            assert check["id"] == CONNECTIVITY_CHECK_ID
            assert check["ok"] is True
            assert check["latency_ms"] == 10
            assert check["checkOutput"] == "OK"

    def test_health_unreachable(self):
        """Test health when Neo4j is down."""
        with patch(
            "content_rw.graph.health.ping",
            return_value=(False, None, {"reachable": False, "error": "connection refused"}),
        ):
            health = get_graph_health()

            assert health["ok"] is False
            check = health["checks"][0]
            assert check["ok"] is False
            assert check["latency_ms"] is None
            assert check["checkOutput"] == "connection refused"
            assert check["severity"] == 1

    def test_health_reports_timeout(self):
        """Test the configured check timeout is part of the report."""
        with patch("content_rw.graph.health.ping", return_value=(True, 1, {"reachable": True})):
            with patch.object(settings, "HEALTH_CHECK_TIMEOUT_SECONDS", 25):
                health = get_graph_health()

        assert health["timeoutSeconds"] == 25
