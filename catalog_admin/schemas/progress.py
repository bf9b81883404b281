"""Progress log schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from catalog_admin.schemas.common import ProgressPhase, ProgressStatus, blank_to_none


class ProgressLogBody(BaseModel):
    """Body for POST /api/projects/{id}/progress (project taken from the path)."""

    phase: ProgressPhase
    status: ProgressStatus = "in_progress"
    note: Optional[str] = None
    logged_by: Optional[str] = Field(None, max_length=255)

    @field_validator("note", "logged_by", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class ProgressLogCreate(ProgressLogBody):
    """New timeline entry for a project."""

    project_id: str = Field(..., min_length=1, max_length=32)


class ProgressLogOut(BaseModel):
    """Timeline entry."""

    id: str
    project_id: str
    phase: str
    status: str
    note: Optional[str] = None
    logged_by: Optional[str] = None
    logged_at: datetime
    created_at: datetime

    model_config = {"from_attributes": True}
