"""Open Policy Agent client used to screen content before it is written."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from content_rw.core.config import settings
from content_rw.policy.decision import Decision, SpecialContentDecision, SpecialContentQuery
from content_rw.policy.errors import (
    DecisionPayloadError,
    DecisionUnmarshallError,
    QueryMissingPathConfigError,
    QueryRequestError,
    QueryResponseReadingError,
)

logger = logging.getLogger(__name__)

SPECIAL_CONTENT_KEY = "SPECIAL_CONTENT"
PATH_PREFIX = "v1/data"


class PolicyAgent:
    """
    Client for an Open Policy Agent data API.

    Args:
        url: Base URL of the agent
        paths: Policy key -> policy path (e.g. SPECIAL_CONTENT -> "content_rw_neo4j/special_content")
        client: Optional preconfigured httpx client (owned by the caller)
    """

    def __init__(
        self,
        url: str,
        paths: dict[str, str],
        client: httpx.Client | None = None,
        timeout: float = 5.0,
    ):
        self.url = url.rstrip("/")
        self.paths = paths
        self._client = client
        self._timeout = timeout

    def check_special_content_policy(self, query: SpecialContentQuery) -> Decision:
        """
        Ask the agent whether content is special content.

        Raises:
            QueryMissingPathConfigError: if no SPECIAL_CONTENT path is configured
            QueryRequestError: on transport failure
            QueryResponseReadingError: on a non-2xx answer
            DecisionUnmarshallError: if the answer is not JSON
            DecisionPayloadError: if the answer lacks decision_id/result/is_special_content
        """
        path = self.paths.get(SPECIAL_CONTENT_KEY)
        if not path:
            raise QueryMissingPathConfigError(SPECIAL_CONTENT_KEY)

        resp = self._query_policy_agent(query.model_dump(by_alias=True), path)

        try:
            payload = resp.json()
        except ValueError as e:
            raise DecisionUnmarshallError(e) from e
        if not isinstance(payload, dict):
            raise DecisionPayloadError("decision is not a JSON object")

        decision_id = payload.get("decision_id")
        if not isinstance(decision_id, str):
            raise DecisionPayloadError("could not cast decision_id to string")

        result = payload.get("result")
        if not isinstance(result, dict):
            raise DecisionPayloadError("result is either nil or there was a problem casting it")

        is_special_content = result.get("is_special_content")
        if not isinstance(is_special_content, bool):
            raise DecisionPayloadError("could not cast is_special_content to bool")

        return Decision(
            decision_id=decision_id,
            result=SpecialContentDecision(is_special_content=is_special_content),
        )

    def evaluate_special_content_policy(self, attributes: dict[str, Any]) -> SpecialContentDecision:
        """Evaluate the special content policy for a content attribute map."""
        decision = self.check_special_content_policy(SpecialContentQuery.model_validate(attributes))
        logger.debug(
            "Special content policy evaluated",
            extra={
                "decision_id": decision.decision_id,
                "is_special_content": decision.result.is_special_content,
            },
        )
        return decision.result

    def _query_policy_agent(self, query: dict[str, Any], path: str) -> httpx.Response:
        url = f"{self.url}/{PATH_PREFIX}/{path}"
        try:
            if self._client is not None:
                resp = self._client.post(url, json={"input": query})
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    resp = client.post(url, json={"input": query})
        except httpx.HTTPError as e:
            raise QueryRequestError(e) from e

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise QueryResponseReadingError(e) from e
        return resp


def build_policy_agent() -> PolicyAgent:
    """Create the policy agent from application settings."""
    return PolicyAgent(
        settings.OPA_URL,
        {SPECIAL_CONTENT_KEY: settings.OPA_SPECIAL_CONTENT_POLICY_PATH},
        timeout=settings.OPA_TIMEOUT_SECONDS,
    )
