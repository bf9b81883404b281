"""Pydantic request/response schemas."""
from catalog_admin.schemas.common import DeleteResponse, ErrorResponse, MessageResponse
from catalog_admin.schemas.catalog import (
    CatalogItemCreate,
    IndustryCreate,
    IndustryOut,
    NicheCreate,
    NicheOut,
    ProductCreate,
    ProductOut,
    ServiceCreate,
    ServiceOut,
)
from catalog_admin.schemas.company import (
    CompanyCreate,
    CompanyDetailOut,
    CompanyOut,
    CompanyUpdate,
)
from catalog_admin.schemas.project import (
    AdvanceResult,
    ProjectCreate,
    ProjectOut,
    ProjectUpdate,
)
from catalog_admin.schemas.blueprint import (
    ApplyBlueprintRequest,
    ApplyBlueprintResult,
    BlueprintCreate,
    BlueprintDetailOut,
)

__all__ = [
    "DeleteResponse",
    "ErrorResponse",
    "MessageResponse",
    "CatalogItemCreate",
    "IndustryCreate",
    "IndustryOut",
    "NicheCreate",
    "NicheOut",
    "ProductCreate",
    "ProductOut",
    "ServiceCreate",
    "ServiceOut",
    "CompanyCreate",
    "CompanyDetailOut",
    "CompanyOut",
    "CompanyUpdate",
    "AdvanceResult",
    "ProjectCreate",
    "ProjectOut",
    "ProjectUpdate",
    "ApplyBlueprintRequest",
    "ApplyBlueprintResult",
    "BlueprintCreate",
    "BlueprintDetailOut",
]
