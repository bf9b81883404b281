"""Project request/response schemas."""
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog_admin.schemas.common import ProjectStatus, blank_to_none, reject_null


class ProjectCreate(BaseModel):
    """
    Body for POST /api/projects. company_id must already be resolved by the caller.
    """

    company_id: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    target_date: Optional[date] = None

    @field_validator("company_id", "name", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "start_date", "target_date", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class ProjectUpdate(BaseModel):
    """Partial update. company_id is not accepted: a project never changes owner."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    target_date: Optional[date] = None
    completed_date: Optional[date] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        v = reject_null(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "start_date", "target_date", "completed_date", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class ProjectStatusUpdate(BaseModel):
    """Body for PUT /api/projects/{id}/status (any value, no ordering check)."""

    status: ProjectStatus


class ProjectOut(BaseModel):
    """Project row (company_name joined in on reads)."""

    id: str
    company_id: str
    company_name: Optional[str] = None
    name: str
    description: Optional[str] = None
    status: str
    start_date: Optional[date] = None
    target_date: Optional[date] = None
    completed_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AdvanceResult(BaseModel):
    """Result of advancing a project one step along planning -> completed."""

    project: ProjectOut
    advanced: bool
    new_status: Optional[str] = None
    reason: Optional[str] = None


class ProjectToolCreate(BaseModel):
    """Body for POST /api/projects/{id}/tools."""

    tool_id: str = Field(..., min_length=1, max_length=32)
    config_json: Optional[Any] = None
    notes: Optional[str] = None

    @field_validator("notes", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class ProjectToolOut(BaseModel):
    """Project-tool assignment, with tool name/category when joined."""

    id: str
    project_id: str
    tool_id: str
    tool_name: Optional[str] = None
    tool_category: Optional[str] = None
    config_json: Optional[Any] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
