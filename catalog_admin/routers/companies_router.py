"""Companies API: CRUD, status, catalog links (add one / replace all)."""
from enum import Enum
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import get_db
from catalog_admin.routers.common import deleted_or_404, found_or_404
from catalog_admin.schemas.common import CompanyStatus, DeleteResponse
from catalog_admin.schemas.company import (
    AssignmentCreate,
    AssignmentOut,
    AssignmentReplace,
    CompanyCreate,
    CompanyDetailOut,
    CompanyOut,
    CompanyUpdate,
)
from catalog_admin.services import company_service

router = APIRouter(prefix="/api/companies", tags=["companies"])


class LinkCollection(str, Enum):
    """Path segment for a company's catalog links."""

    industries = "industries"
    niches = "niches"
    products = "products"
    services = "services"

    @property
    def kind(self) -> str:
        return {"industries": "industry", "niches": "niche", "products": "product", "services": "service"}[self.value]


@router.post("", response_model=CompanyOut, status_code=status.HTTP_201_CREATED)
async def post_company(payload: CompanyCreate, db: AsyncSession = Depends(get_db)) -> CompanyOut:
    return await company_service.create_company(db, payload)


@router.get("", response_model=list[CompanyOut])
async def get_companies(
    status_filter: Optional[CompanyStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="ILIKE on name"),
    db: AsyncSession = Depends(get_db),
) -> list[CompanyOut]:
    return await company_service.list_companies(db, status=status_filter, search=search)


@router.get("/{ref}", response_model=CompanyDetailOut)
async def get_company(
    ref: str,
    include_projects: bool = Query(False),
    db: AsyncSession = Depends(get_db),
) -> CompanyDetailOut:
    """Company by id or name with its linked catalog items (and projects on request)."""
    company = await company_service.get_company(db, ref, include_projects=include_projects)
    return found_or_404(company, "Company")


@router.patch("/{company_id}", response_model=CompanyOut)
async def patch_company(
    company_id: str,
    payload: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
) -> CompanyOut:
    """Partial update; status may also be set here."""
    return found_or_404(await company_service.update_company(db, company_id, payload), "Company")


@router.delete("/{company_id}", response_model=DeleteResponse)
async def delete_company(company_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    return deleted_or_404(await company_service.delete_company(db, company_id), company_id, "Company")


@router.post(
    "/{company_id}/{collection}",
    response_model=AssignmentOut,
    status_code=status.HTTP_201_CREATED,
)
async def post_assignment(
    company_id: str,
    collection: LinkCollection,
    payload: AssignmentCreate,
    db: AsyncSession = Depends(get_db),
) -> AssignmentOut:
    """Add one link. Unknown company or item: 409."""
    return await company_service.assign(db, company_id, collection.kind, payload.ref_id, payload.notes)


@router.put("/{company_id}/{collection}", response_model=list[AssignmentOut])
async def put_assignments(
    company_id: str,
    collection: LinkCollection,
    payload: AssignmentReplace,
    db: AsyncSession = Depends(get_db),
) -> list[AssignmentOut]:
    """Replace the whole set of links of this kind; all-or-nothing."""
    company = found_or_404(await company_service.get_company(db, company_id), "Company")
    return await company_service.replace_assignments(db, company.id, collection.kind, payload.ids)
