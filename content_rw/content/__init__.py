"""Content document model and graph service."""

from content_rw.content.errors import InvalidPublishedDateError
from content_rw.content.model import Content
from content_rw.content.service import ContentService

__all__ = ["Content", "ContentService", "InvalidPublishedDateError"]
