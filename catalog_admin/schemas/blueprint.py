"""Blueprint request/response schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from catalog_admin.schemas.common import blank_to_none
from catalog_admin.schemas.company import AssignedItemOut
from catalog_admin.schemas.project import ProjectOut


class BlueprintCreate(BaseModel):
    """Body for POST /api/blueprints."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class BlueprintStepBody(BaseModel):
    """Body for POST /api/blueprints/{id}/steps. step_order is not checked for gaps/duplicates."""

    step_order: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=512)
    description: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class BlueprintStepCreate(BlueprintStepBody):
    blueprint_id: str = Field(..., min_length=1, max_length=32)


class BlueprintToolBody(BaseModel):
    """Body for POST /api/blueprints/{id}/tools."""

    tool_id: str = Field(..., min_length=1, max_length=32)
    role_in_blueprint: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None

    @field_validator("role_in_blueprint", "notes", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class BlueprintToolCreate(BlueprintToolBody):
    blueprint_id: str = Field(..., min_length=1, max_length=32)


class BlueprintOut(BaseModel):
    """Blueprint row."""

    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BlueprintStepOut(BaseModel):
    id: str
    blueprint_id: str
    step_order: int
    title: str
    description: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class BlueprintToolOut(BaseModel):
    id: str
    blueprint_id: str
    tool_id: str
    tool_name: Optional[str] = None
    role_in_blueprint: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class BlueprintDetailOut(BlueprintOut):
    """Blueprint with steps (by step_order), tools and industry/niche tags."""

    steps: List[BlueprintStepOut] = Field(default_factory=list)
    tools: List[BlueprintToolOut] = Field(default_factory=list)
    industries: List[AssignedItemOut] = Field(default_factory=list)
    niches: List[AssignedItemOut] = Field(default_factory=list)


class BlueprintTagCreate(BaseModel):
    """Body for tagging a blueprint with an industry or niche."""

    ref_id: str = Field(..., min_length=1, max_length=32)


class ApplyBlueprintRequest(BaseModel):
    """Body for POST /api/blueprints/{ref}/apply. company may be an id or a name."""

    company: str = Field(..., min_length=1, max_length=255)
    project_name: Optional[str] = Field(None, max_length=255)

    @field_validator("project_name", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class ApplyBlueprintResult(BaseModel):
    """New project created from a blueprint."""

    project: ProjectOut
    blueprint: BlueprintDetailOut
