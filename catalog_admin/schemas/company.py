"""Company request/response schemas."""
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from catalog_admin.schemas.common import CompanyStatus, blank_to_none, reject_null, validate_http_url

AssignmentKind = Literal["industry", "niche", "product", "service"]


class _CompanyFields(BaseModel):
    """Contact fields shared by create/update. Empty string = not provided."""

    contact_name: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=64)
    website: Optional[str] = Field(None, max_length=2048)
    notes: Optional[str] = None

    @field_validator("contact_name", "contact_email", "contact_phone", "website", "notes", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)

    @field_validator("website")
    @classmethod
    def _website_is_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class CompanyCreate(_CompanyFields):
    """Body for POST /api/companies."""

    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class CompanyUpdate(_CompanyFields):
    """Partial update: only fields present in the payload are written."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[CompanyStatus] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        v = reject_null(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v):
        return reject_null(v)


class CompanyOut(BaseModel):
    """Company row."""

    id: str
    name: str
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AssignedItemOut(BaseModel):
    """A catalog item linked to a company or blueprint (id = catalog item id)."""

    id: str
    name: str
    assignment_id: str
    notes: Optional[str] = None
    industry_name: Optional[str] = Field(None, description="Niches only")


class CompanyProjectSummary(BaseModel):
    """Project line shown on the company detail page."""

    id: str
    name: str
    status: str
    target_date: Optional[date] = None
    updated_at: datetime

    model_config = {"from_attributes": True}


class CompanyDetailOut(CompanyOut):
    """Company with its catalog links (and projects in the dashboard variant)."""

    industries: List[AssignedItemOut] = Field(default_factory=list)
    niches: List[AssignedItemOut] = Field(default_factory=list)
    products: List[AssignedItemOut] = Field(default_factory=list)
    services: List[AssignedItemOut] = Field(default_factory=list)
    projects: Optional[List[CompanyProjectSummary]] = None


class AssignmentCreate(BaseModel):
    """Body for adding one catalog link to a company."""

    ref_id: str = Field(..., min_length=1, max_length=32)
    notes: Optional[str] = None

    @field_validator("notes", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class AssignmentReplace(BaseModel):
    """Body for replacing the whole set of one kind of link."""

    ids: List[str] = Field(default_factory=list, max_length=500)


class AssignmentOut(BaseModel):
    """One junction row."""

    id: str
    company_id: str
    ref_id: str
    notes: Optional[str] = None
