"""Catalog (industry / niche / product / service) request/response schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from catalog_admin.schemas.common import blank_to_none


class CatalogItemCreate(BaseModel):
    """Body for creating an industry, product or service."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, v):
        return blank_to_none(v)


class IndustryCreate(CatalogItemCreate):
    """Body for POST /api/industries."""


class ProductCreate(CatalogItemCreate):
    """Body for POST /api/products."""


class ServiceCreate(CatalogItemCreate):
    """Body for POST /api/services."""


class NicheCreate(CatalogItemCreate):
    """Body for POST /api/niches. Name is unique within the industry."""

    industry_id: str = Field(..., min_length=1, max_length=32)

    @field_validator("industry_id", mode="before")
    @classmethod
    def _strip_industry(cls, v):
        return v.strip() if isinstance(v, str) else v


class CatalogItemOut(BaseModel):
    """Industry, product or service row."""

    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class IndustryOut(CatalogItemOut):
    pass


class ProductOut(CatalogItemOut):
    pass


class ServiceOut(CatalogItemOut):
    pass


class NicheOut(CatalogItemOut):
    """Niche row with its industry name joined in."""

    industry_id: str
    industry_name: Optional[str] = None
