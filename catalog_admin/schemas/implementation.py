"""Implementation detail schemas."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog_admin.schemas.common import ImplType, reject_null


class ImplementationDetailBody(BaseModel):
    """Body for POST /api/projects/{id}/details."""

    type: ImplType
    title: str = Field(..., min_length=1, max_length=512)
    content: str = Field(..., min_length=1)
    metadata_json: Optional[Any] = None
    sort_order: int = 0


class ImplementationDetailCreate(ImplementationDetailBody):
    project_id: str = Field(..., min_length=1, max_length=32)


class ImplementationDetailUpdate(BaseModel):
    """Partial update of an implementation detail."""

    model_config = ConfigDict(extra="forbid")

    type: Optional[ImplType] = None
    title: Optional[str] = Field(None, min_length=1, max_length=512)
    content: Optional[str] = Field(None, min_length=1)
    metadata_json: Optional[Any] = None
    sort_order: Optional[int] = None

    @field_validator("type", "title", "content", "sort_order", mode="before")
    @classmethod
    def _not_null(cls, v):
        return reject_null(v)


class ImplementationDetailOut(BaseModel):
    """Implementation detail row."""

    id: str
    project_id: str
    type: str
    title: str
    content: str
    metadata_json: Optional[Any] = None
    sort_order: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
