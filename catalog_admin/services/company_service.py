"""
Company service: CRUD, status, and links to industries / niches / products / services.
Links are added one at a time (duplicates allowed) or replaced as a whole set.
Caller commits session.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import utcnow
from catalog_admin.exceptions import translate_integrity_error
from catalog_admin.logging_config import get_logger
from catalog_admin.models import (
    Company,
    CompanyIndustry,
    CompanyNiche,
    CompanyProduct,
    CompanyService,
    Industry,
    Niche,
    Product,
    Project,
    Service,
)
from catalog_admin.schemas.company import (
    AssignmentOut,
    CompanyCreate,
    CompanyDetailOut,
    CompanyOut,
    CompanyProjectSummary,
    CompanyUpdate,
)
from catalog_admin.services.common import (
    apply_search,
    find_by_id_or_name,
    flush_or_raise,
    list_linked_items,
    soft_delete,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Link:
    model: Type[Any]
    ref_attr: str
    target: Type[Any]


LINKS: Dict[str, _Link] = {
    "industry": _Link(CompanyIndustry, "industry_id", Industry),
    "niche": _Link(CompanyNiche, "niche_id", Niche),
    "product": _Link(CompanyProduct, "product_id", Product),
    "service": _Link(CompanyService, "service_id", Service),
}


def _link(kind: str) -> _Link:
    try:
        return LINKS[kind]
    except KeyError:
        raise ValueError(f"unknown_assignment_kind: {kind}") from None


def _assignment_out(link: _Link, row: Any) -> AssignmentOut:
    return AssignmentOut(
        id=row.id,
        company_id=row.company_id,
        ref_id=getattr(row, link.ref_attr),
        notes=getattr(row, "notes", None),
    )


async def _get_live(db: AsyncSession, company_id: str) -> Optional[Company]:
    r = await db.execute(
        select(Company).where(Company.id == company_id, Company.deleted_at.is_(None))
    )
    return r.scalar_one_or_none()


async def create_company(db: AsyncSession, payload: CompanyCreate) -> CompanyOut:
    """Create a company (status active). Raises UniqueConstraintViolation on duplicate name."""
    company = Company(
        name=payload.name,
        contact_name=payload.contact_name,
        contact_email=payload.contact_email,
        contact_phone=payload.contact_phone,
        website=payload.website,
        notes=payload.notes,
    )
    db.add(company)
    await flush_or_raise(db, "company")
    await db.refresh(company)
    logger.info("company.created", company_id=company.id, name=company.name)
    return CompanyOut.model_validate(company)


async def list_companies(
    db: AsyncSession,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[CompanyOut]:
    """Live companies ordered by name; search is ILIKE on name only."""
    q = select(Company).where(Company.deleted_at.is_(None))
    if status:
        q = q.where(Company.status == status)
    q = apply_search(q, search, Company.name).order_by(Company.name)
    r = await db.execute(q)
    return [CompanyOut.model_validate(c) for c in r.scalars().all()]


async def get_company(
    db: AsyncSession,
    ref: str,
    include_projects: bool = False,
) -> Optional[CompanyDetailOut]:
    """
    Look up by id, then by name. Loads linked industries, niches, products, services;
    include_projects adds the company's live projects (newest activity first).
    """
    row = await find_by_id_or_name(db, Company, ref)
    if row is None:
        return None
    company: Company = row[0]

    # One session cannot run statements concurrently; the four reads go in sequence.
    links = {}
    for kind, link in LINKS.items():
        links[kind] = await list_linked_items(
            db,
            link.model,
            link.model.company_id,
            company.id,
            getattr(link.model, link.ref_attr),
            link.target,
        )

    detail = CompanyDetailOut(
        **CompanyOut.model_validate(company).model_dump(),
        industries=links["industry"],
        niches=links["niche"],
        products=links["product"],
        services=links["service"],
    )
    if include_projects:
        r = await db.execute(
            select(Project)
            .where(Project.company_id == company.id, Project.deleted_at.is_(None))
            .order_by(Project.updated_at.desc())
        )
        detail.projects = [CompanyProjectSummary.model_validate(p) for p in r.scalars().all()]
    return detail


async def update_company(
    db: AsyncSession,
    company_id: str,
    payload: CompanyUpdate,
) -> Optional[CompanyOut]:
    """
    Write only the fields present in payload; always touches updated_at.
    Any status may follow any other. Returns None when the company is missing.
    """
    company = await _get_live(db, company_id)
    if company is None:
        return None
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(company, field, value)
    company.updated_at = utcnow()
    await flush_or_raise(db, "company")
    await db.refresh(company)
    logger.info("company.updated", company_id=company.id, fields=sorted(changes))
    return CompanyOut.model_validate(company)


async def set_company_status(db: AsyncSession, company_id: str, status: str) -> Optional[CompanyOut]:
    return await update_company(db, company_id, CompanyUpdate(status=status))


async def delete_company(db: AsyncSession, company_id: str) -> bool:
    return await soft_delete(db, Company, company_id)


async def assign(
    db: AsyncSession,
    company_id: str,
    kind: str,
    ref_id: str,
    notes: Optional[str] = None,
) -> AssignmentOut:
    """
    Insert one link row. No duplicate check: assigning the same item twice gives two rows.
    notes is kept for product/service links only. A missing company or item surfaces
    as ReferentialIntegrityError from the foreign key.
    """
    link = _link(kind)
    values = {"company_id": company_id, link.ref_attr: ref_id}
    if hasattr(link.model, "notes"):
        values["notes"] = notes
    row = link.model(**values)
    db.add(row)
    await flush_or_raise(db, kind)
    logger.info("company.assigned", company_id=company_id, kind=kind, ref_id=ref_id)
    return _assignment_out(link, row)


async def assign_industry(db: AsyncSession, company_id: str, industry_id: str) -> AssignmentOut:
    return await assign(db, company_id, "industry", industry_id)


async def assign_niche(db: AsyncSession, company_id: str, niche_id: str) -> AssignmentOut:
    return await assign(db, company_id, "niche", niche_id)


async def assign_product(
    db: AsyncSession, company_id: str, product_id: str, notes: Optional[str] = None
) -> AssignmentOut:
    return await assign(db, company_id, "product", product_id, notes)


async def assign_service(
    db: AsyncSession, company_id: str, service_id: str, notes: Optional[str] = None
) -> AssignmentOut:
    return await assign(db, company_id, "service", service_id, notes)


async def replace_assignments(
    db: AsyncSession,
    company_id: str,
    kind: str,
    ids: List[str],
) -> List[AssignmentOut]:
    """
    Delete every link of this kind for the company, then insert one row per id.
    Runs in a SAVEPOINT: on failure no partial set is left behind.
    """
    link = _link(kind)
    rows = [link.model(company_id=company_id, **{link.ref_attr: ref_id}) for ref_id in ids]
    try:
        async with db.begin_nested():
            await db.execute(delete(link.model).where(link.model.company_id == company_id))
            db.add_all(rows)
            await db.flush()
    except IntegrityError as exc:
        logger.warning("company.assignments_replace_failed", company_id=company_id, kind=kind)
        raise translate_integrity_error(exc, kind) from exc
    logger.info("company.assignments_replaced", company_id=company_id, kind=kind, count=len(rows))
    return [_assignment_out(link, row) for row in rows]


async def count_assignments(db: AsyncSession, company_id: str, kind: str) -> int:
    """Raw number of link rows (duplicates included)."""
    link = _link(kind)
    r = await db.execute(select(func.count(link.model.id)).where(link.model.company_id == company_id))
    return r.scalar() or 0
