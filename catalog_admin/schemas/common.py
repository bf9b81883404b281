"""Common schemas (enums, errors, messages) and shared field helpers."""
from typing import Any, Dict, Literal, Optional, get_args

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter

CompanyStatus = Literal["active", "inactive", "archived"]
ProjectStatus = Literal["planning", "in_progress", "review", "completed", "on_hold", "cancelled"]
ProgressPhase = Literal["discovery", "design", "build", "test", "deploy", "handoff"]
ProgressStatus = Literal["in_progress", "completed", "blocked"]
ImplType = Literal["prompt", "config", "api_ref", "note"]
ToolCategory = Literal["ai_platform", "api", "messaging", "analytics", "crm", "payment", "hosting", "other"]

COMPANY_STATUSES: tuple[str, ...] = get_args(CompanyStatus)
PROJECT_STATUSES: tuple[str, ...] = get_args(ProjectStatus)
PROGRESS_PHASES: tuple[str, ...] = get_args(ProgressPhase)
PROGRESS_STATUSES: tuple[str, ...] = get_args(ProgressStatus)
IMPL_TYPES: tuple[str, ...] = get_args(ImplType)
TOOL_CATEGORIES: tuple[str, ...] = get_args(ToolCategory)

_http_url = TypeAdapter(HttpUrl)


def blank_to_none(value: Any) -> Any:
    """Strip strings; empty string means "not provided"."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def reject_null(value: Any) -> Any:
    """Partial updates may omit a required column but never set it to null."""
    if value is None:
        raise ValueError("may be omitted but cannot be null")
    return value


def validate_http_url(value: Optional[str]) -> Optional[str]:
    """Check value is a well-formed http(s) URL; keep the caller's spelling."""
    if value is None:
        return None
    _http_url.validate_python(value)
    return value


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(..., description="Error message")
    code: Optional[str] = Field(None, description="Optional error code")
    extra: Optional[Dict[str, Any]] = Field(None, description="Extra context")


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str = Field(..., description="Message text")


class DeleteResponse(BaseModel):
    """Soft delete result."""

    id: str
    deleted: bool
