"""Pytest configuration and shared fixtures."""

import os

os.environ.setdefault("ENV", "test")

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from content_rw.api.dependencies import get_content_service  # noqa: E402
from content_rw.content.service import ContentService  # noqa: E402
from content_rw.main import app  # noqa: E402
from content_rw.policy.decision import SpecialContentDecision  # noqa: E402

SPECIAL_CONTENT_EDITORIAL_DESK = "/FT/Professional/Central Banking"


class StubPolicyAgent:
    """Policy agent flagging one editorial desk as special content."""

    def __init__(self, special_desk: str = SPECIAL_CONTENT_EDITORIAL_DESK):
        self.special_desk = special_desk
        self.calls: list[dict[str, Any]] = []

    def evaluate_special_content_policy(self, attributes: dict[str, Any]) -> SpecialContentDecision:
        self.calls.append(attributes)
        return SpecialContentDecision(
            is_special_content=attributes.get("editorialDesk") == self.special_desk
        )


@pytest.fixture
def policy_agent() -> StubPolicyAgent:
    """Policy agent stub."""
    return StubPolicyAgent()


@pytest.fixture
def content_service(policy_agent) -> ContentService:
    """Content service wired to the policy agent stub."""
    return ContentService(policy_agent)


@pytest.fixture
def mock_service() -> MagicMock:
    """Content service mock for endpoint tests."""
    return MagicMock(spec=ContentService)


@pytest.fixture
def client(mock_service) -> Generator[TestClient, None, None]:
    """Test client with the content service replaced by a mock."""
    app.dependency_overrides[get_content_service] = lambda: mock_service
    try:
        # No context manager: lifespan (schema setup against Neo4j) is not run
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
