"""Tool registry schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from catalog_admin.schemas.common import ToolCategory, blank_to_none, validate_http_url


class ToolCreate(BaseModel):
    """Body for POST /api/tools."""

    name: str = Field(..., min_length=1, max_length=255)
    category: Optional[ToolCategory] = None
    url: Optional[str] = Field(None, max_length=2048)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("category", "url", "description", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)

    @field_validator("url")
    @classmethod
    def _url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class ToolOut(BaseModel):
    """Tool row."""

    id: str
    name: str
    category: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
