"""Policy agent client for screening content before it is persisted."""

from content_rw.policy.agent import SPECIAL_CONTENT_KEY, PolicyAgent, build_policy_agent
from content_rw.policy.decision import Decision, SpecialContentDecision, SpecialContentQuery
from content_rw.policy.errors import (
    DecisionPayloadError,
    DecisionUnmarshallError,
    PolicyAgentError,
    QueryMissingPathConfigError,
    QueryRequestError,
    QueryResponseReadingError,
)

__all__ = [
    "SPECIAL_CONTENT_KEY",
    "PolicyAgent",
    "build_policy_agent",
    "Decision",
    "SpecialContentDecision",
    "SpecialContentQuery",
    "PolicyAgentError",
    "QueryMissingPathConfigError",
    "QueryRequestError",
    "QueryResponseReadingError",
    "DecisionUnmarshallError",
    "DecisionPayloadError",
]
