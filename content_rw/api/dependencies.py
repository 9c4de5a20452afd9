"""FastAPI dependencies."""

from functools import lru_cache

from fastapi import Request

from content_rw.common.request_id import get_request_id
from content_rw.content.service import ContentService
from content_rw.policy.agent import build_policy_agent


@lru_cache
def get_content_service() -> ContentService:
    """Get the process-wide content service."""
    return ContentService(build_policy_agent())


def get_transaction_id(request: Request) -> str:
    """Get the transaction ID assigned by RequestIDMiddleware."""
    return get_request_id(request)
