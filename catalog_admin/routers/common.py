"""Helpers shared by routers: service None results become 404."""
from typing import Optional, TypeVar

from fastapi import HTTPException, status

from catalog_admin.schemas.common import DeleteResponse

T = TypeVar("T")


def found_or_404(item: Optional[T], what: str) -> T:
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")
    return item


def deleted_or_404(existed: bool, item_id: str, what: str) -> DeleteResponse:
    """Soft delete result; a missing row is a 404, an already-deleted one is not."""
    if not existed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")
    return DeleteResponse(id=item_id, deleted=True)
