"""Content read/write endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from content_rw.api.dependencies import get_content_service, get_transaction_id
from content_rw.content.model import Content
from content_rw.content.service import ContentService
from content_rw.core.errors import AppError

router = APIRouter(tags=["Content"])

ServiceDep = Annotated[ContentService, Depends(get_content_service)]
TransactionIdDep = Annotated[str, Depends(get_transaction_id)]


def _not_found() -> AppError:
    return AppError(status.HTTP_404_NOT_FOUND, "NOT_FOUND", "Content not found")


# Declared before /{uuid} so "__count" is not taken for a uuid
@router.get("/__count", summary="Count content nodes")
def count_content(service: ServiceDep) -> int:
    """Return the number of Content nodes in Neo4j."""
    return service.count()


@router.get("/{uuid}", summary="Read content")
def read_content(uuid: str, service: ServiceDep, transaction_id: TransactionIdDep) -> dict[str, Any]:
    """Read the stored representation of a content item."""
    content, found = service.read(uuid, transaction_id)
    if not found:
        raise _not_found()
    return content.to_json()


@router.put("/{uuid}", summary="Write content")
def write_content(
    uuid: str,
    content: Content,
    service: ServiceDep,
    transaction_id: TransactionIdDep,
) -> dict[str, Any]:
    """Create or replace a content item."""
    if content.uuid != uuid:
        raise AppError(
            status.HTTP_400_BAD_REQUEST,
            "UUID_MISMATCH",
            "Uuids from payload and request, respectively, do not match",
            {"payload": content.uuid, "request": uuid},
        )
    service.write(content, transaction_id)
    return {}


@router.delete("/{uuid}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete content")
def delete_content(uuid: str, service: ServiceDep, transaction_id: TransactionIdDep) -> Response:
    """Delete a content item and all of its relationships."""
    if not service.delete(uuid, transaction_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
