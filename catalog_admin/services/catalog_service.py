"""
Catalog service: industries, niches, products, services.
Create / list (ILIKE search) / lookup by id or name / soft delete. Caller commits session.
"""
from typing import Any, List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.exceptions import ReferentialIntegrityError
from catalog_admin.logging_config import get_logger
from catalog_admin.models import Industry, Niche, Product, Service
from catalog_admin.schemas.catalog import (
    CatalogItemCreate,
    IndustryOut,
    NicheCreate,
    NicheOut,
    ProductOut,
    ServiceOut,
)
from catalog_admin.services.common import (
    apply_search,
    find_by_id_or_name,
    flush_or_raise,
    soft_delete,
)

logger = get_logger(__name__)


async def _create_flat(db: AsyncSession, model: Type[Any], resource: str, payload: CatalogItemCreate) -> Any:
    item = model(name=payload.name, description=payload.description)
    db.add(item)
    await flush_or_raise(db, resource)
    await db.refresh(item)
    logger.info("catalog.created", kind=resource, id=item.id, name=item.name)
    return item


async def _list_flat(db: AsyncSession, model: Type[Any], search: Optional[str]) -> List[Any]:
    q = select(model).where(model.deleted_at.is_(None))
    q = apply_search(q, search, model.name, model.description).order_by(model.name)
    r = await db.execute(q)
    return list(r.scalars().all())


async def _get_flat(db: AsyncSession, model: Type[Any], ref: str) -> Optional[Any]:
    row = await find_by_id_or_name(db, model, ref)
    return row[0] if row else None


# ── Industries ─────────────────────────────────────────────


async def create_industry(db: AsyncSession, payload: CatalogItemCreate) -> IndustryOut:
    """Create an industry. Raises UniqueConstraintViolation on duplicate name."""
    return IndustryOut.model_validate(await _create_flat(db, Industry, "industry", payload))


async def list_industries(db: AsyncSession, search: Optional[str] = None) -> List[IndustryOut]:
    return [IndustryOut.model_validate(i) for i in await _list_flat(db, Industry, search)]


async def get_industry(db: AsyncSession, ref: str) -> Optional[IndustryOut]:
    item = await _get_flat(db, Industry, ref)
    return IndustryOut.model_validate(item) if item else None


async def delete_industry(db: AsyncSession, industry_id: str) -> bool:
    """
    Soft delete. Refused while the industry still has live niches, so a niche
    never points at a deleted industry.
    """
    r = await db.execute(select(Industry.deleted_at).where(Industry.id == industry_id))
    row = r.first()
    if row is None:
        return False
    if row[0] is None:
        r = await db.execute(
            select(func.count(Niche.id)).where(
                Niche.industry_id == industry_id,
                Niche.deleted_at.is_(None),
            )
        )
        live_niches = r.scalar() or 0
        if live_niches:
            raise ReferentialIntegrityError(
                f"Industry still has {live_niches} niche(s); delete them first"
            )
    return await soft_delete(db, Industry, industry_id)


# ── Niches ─────────────────────────────────────────────────


def _niche_select():
    return select(Niche, Industry.name).join(Industry, Niche.industry_id == Industry.id)


def _niche_out(niche: Niche, industry_name: Optional[str]) -> NicheOut:
    out = NicheOut.model_validate(niche)
    out.industry_name = industry_name
    return out


async def create_niche(db: AsyncSession, payload: NicheCreate) -> NicheOut:
    """
    Create a niche under a live industry.
    Raises ReferentialIntegrityError if the industry is missing or deleted,
    UniqueConstraintViolation if the name is taken within that industry.
    """
    r = await db.execute(
        select(Industry).where(
            Industry.id == payload.industry_id,
            Industry.deleted_at.is_(None),
        )
    )
    industry = r.scalar_one_or_none()
    if industry is None:
        raise ReferentialIntegrityError(f"Industry not found: {payload.industry_id}")

    niche = Niche(industry_id=industry.id, name=payload.name, description=payload.description)
    db.add(niche)
    await flush_or_raise(db, "niche")
    await db.refresh(niche)
    logger.info("catalog.created", kind="niche", id=niche.id, name=niche.name, industry_id=industry.id)
    return _niche_out(niche, industry.name)


async def list_niches(
    db: AsyncSession,
    search: Optional[str] = None,
    industry_id: Optional[str] = None,
) -> List[NicheOut]:
    q = _niche_select().where(Niche.deleted_at.is_(None))
    if industry_id:
        q = q.where(Niche.industry_id == industry_id)
    q = apply_search(q, search, Niche.name, Niche.description).order_by(Niche.name)
    r = await db.execute(q)
    return [_niche_out(n, industry_name) for n, industry_name in r.all()]


async def get_niche(db: AsyncSession, ref: str, industry_id: Optional[str] = None) -> Optional[NicheOut]:
    """
    Niche by id, then by name. Niche names repeat across industries: a bare name
    resolves to the oldest match unless industry_id narrows the lookup.
    """
    stmt = _niche_select()
    if industry_id:
        stmt = stmt.where(Niche.industry_id == industry_id)
    row = await find_by_id_or_name(db, Niche, ref, stmt=stmt)
    if row is None:
        return None
    niche, industry_name = row
    return _niche_out(niche, industry_name)


async def delete_niche(db: AsyncSession, niche_id: str) -> bool:
    return await soft_delete(db, Niche, niche_id)


# ── Products ───────────────────────────────────────────────


async def create_product(db: AsyncSession, payload: CatalogItemCreate) -> ProductOut:
    return ProductOut.model_validate(await _create_flat(db, Product, "product", payload))


async def list_products(db: AsyncSession, search: Optional[str] = None) -> List[ProductOut]:
    return [ProductOut.model_validate(p) for p in await _list_flat(db, Product, search)]


async def get_product(db: AsyncSession, ref: str) -> Optional[ProductOut]:
    item = await _get_flat(db, Product, ref)
    return ProductOut.model_validate(item) if item else None


async def delete_product(db: AsyncSession, product_id: str) -> bool:
    return await soft_delete(db, Product, product_id)


# ── Services ───────────────────────────────────────────────


async def create_service(db: AsyncSession, payload: CatalogItemCreate) -> ServiceOut:
    return ServiceOut.model_validate(await _create_flat(db, Service, "service", payload))


async def list_services(db: AsyncSession, search: Optional[str] = None) -> List[ServiceOut]:
    return [ServiceOut.model_validate(s) for s in await _list_flat(db, Service, search)]


async def get_service(db: AsyncSession, ref: str) -> Optional[ServiceOut]:
    item = await _get_flat(db, Service, ref)
    return ServiceOut.model_validate(item) if item else None


async def delete_service(db: AsyncSession, service_id: str) -> bool:
    return await soft_delete(db, Service, service_id)
