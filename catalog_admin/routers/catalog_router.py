"""Catalog API: industries, niches, products, services."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import get_db
from catalog_admin.routers.common import deleted_or_404, found_or_404
from catalog_admin.schemas.catalog import (
    IndustryCreate,
    IndustryOut,
    NicheCreate,
    NicheOut,
    ProductCreate,
    ProductOut,
    ServiceCreate,
    ServiceOut,
)
from catalog_admin.schemas.common import DeleteResponse
from catalog_admin.services import catalog_service

router = APIRouter(prefix="/api", tags=["catalog"])


# ── Industries ─────────────────────────────────────────────


@router.post("/industries", response_model=IndustryOut, status_code=status.HTTP_201_CREATED)
async def post_industry(payload: IndustryCreate, db: AsyncSession = Depends(get_db)) -> IndustryOut:
    return await catalog_service.create_industry(db, payload)


@router.get("/industries", response_model=list[IndustryOut])
async def get_industries(
    search: Optional[str] = Query(None, description="ILIKE on name/description"),
    db: AsyncSession = Depends(get_db),
) -> list[IndustryOut]:
    return await catalog_service.list_industries(db, search=search)


@router.get("/industries/{ref}", response_model=IndustryOut)
async def get_industry(ref: str, db: AsyncSession = Depends(get_db)) -> IndustryOut:
    """Lookup by id, then by name."""
    return found_or_404(await catalog_service.get_industry(db, ref), "Industry")


@router.delete("/industries/{industry_id}", response_model=DeleteResponse)
async def delete_industry(industry_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    """Soft delete; 409 while live niches remain."""
    return deleted_or_404(await catalog_service.delete_industry(db, industry_id), industry_id, "Industry")


# ── Niches ─────────────────────────────────────────────────


@router.post("/niches", response_model=NicheOut, status_code=status.HTTP_201_CREATED)
async def post_niche(payload: NicheCreate, db: AsyncSession = Depends(get_db)) -> NicheOut:
    return await catalog_service.create_niche(db, payload)


@router.get("/niches", response_model=list[NicheOut])
async def get_niches(
    search: Optional[str] = Query(None),
    industry_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[NicheOut]:
    return await catalog_service.list_niches(db, search=search, industry_id=industry_id)


@router.get("/niches/{ref}", response_model=NicheOut)
async def get_niche(
    ref: str,
    industry_id: Optional[str] = Query(None, description="Narrows a name lookup to one industry"),
    db: AsyncSession = Depends(get_db),
) -> NicheOut:
    return found_or_404(await catalog_service.get_niche(db, ref, industry_id=industry_id), "Niche")


@router.delete("/niches/{niche_id}", response_model=DeleteResponse)
async def delete_niche(niche_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    return deleted_or_404(await catalog_service.delete_niche(db, niche_id), niche_id, "Niche")


# ── Products ───────────────────────────────────────────────


@router.post("/products", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
async def post_product(payload: ProductCreate, db: AsyncSession = Depends(get_db)) -> ProductOut:
    return await catalog_service.create_product(db, payload)


@router.get("/products", response_model=list[ProductOut])
async def get_products(
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[ProductOut]:
    return await catalog_service.list_products(db, search=search)


@router.get("/products/{ref}", response_model=ProductOut)
async def get_product(ref: str, db: AsyncSession = Depends(get_db)) -> ProductOut:
    return found_or_404(await catalog_service.get_product(db, ref), "Product")


@router.delete("/products/{product_id}", response_model=DeleteResponse)
async def delete_product(product_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    return deleted_or_404(await catalog_service.delete_product(db, product_id), product_id, "Product")


# ── Services ───────────────────────────────────────────────


@router.post("/services", response_model=ServiceOut, status_code=status.HTTP_201_CREATED)
async def post_service(payload: ServiceCreate, db: AsyncSession = Depends(get_db)) -> ServiceOut:
    return await catalog_service.create_service(db, payload)


@router.get("/services", response_model=list[ServiceOut])
async def get_services(
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[ServiceOut]:
    return await catalog_service.list_services(db, search=search)


@router.get("/services/{ref}", response_model=ServiceOut)
async def get_service(ref: str, db: AsyncSession = Depends(get_db)) -> ServiceOut:
    return found_or_404(await catalog_service.get_service(db, ref), "Service")


@router.delete("/services/{service_id}", response_model=DeleteResponse)
async def delete_service(service_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    return deleted_or_404(await catalog_service.delete_service(db, service_id), service_id, "Service")
