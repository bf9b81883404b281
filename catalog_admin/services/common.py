"""Shared query helpers: id-or-name lookup, ILIKE search, soft delete, guarded flush."""
from typing import Any, List, Optional, Type

from sqlalchemy import Select, literal, or_, select
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import utcnow
from catalog_admin.exceptions import translate_integrity_error
from catalog_admin.logging_config import get_logger
from catalog_admin.models import Industry, Niche
from catalog_admin.schemas.company import AssignedItemOut

logger = get_logger(__name__)


async def find_by_id_or_name(
    db: AsyncSession,
    model: Type[Any],
    ref: str,
    stmt: Optional[Select] = None,
) -> Optional[Row]:
    """
    Try exact id among live rows, then exact name among live rows.
    stmt lets callers add joined columns; the first element of the row is the entity.
    Returns None when neither matches.
    """
    base = stmt if stmt is not None else select(model)
    live = base.where(model.deleted_at.is_(None))
    r = await db.execute(live.where(model.id == ref))
    row = r.first()
    if row is not None:
        return row
    r = await db.execute(live.where(model.name == ref).order_by(model.created_at).limit(1))
    return r.first()


def apply_search(stmt: Select, search: Optional[str], *columns: Any) -> Select:
    """Case-insensitive substring match on any of the given columns."""
    if not search or not search.strip():
        return stmt
    pattern = f"%{search.strip()}%"
    return stmt.where(or_(*(col.ilike(pattern) for col in columns)))


async def flush_or_raise(db: AsyncSession, resource: str) -> None:
    """Flush pending writes; integrity errors become domain errors."""
    try:
        await db.flush()
    except IntegrityError as exc:
        logger.warning("store.integrity_error", resource=resource, error=type(exc.orig).__name__)
        raise translate_integrity_error(exc, resource) from exc


async def soft_delete(db: AsyncSession, model: Type[Any], entity_id: str) -> bool:
    """
    Stamp deleted_at. Idempotent: an already-deleted row keeps its original stamp.
    Returns False only when no row with that id exists.
    """
    r = await db.execute(select(model).where(model.id == entity_id))
    entity = r.scalar_one_or_none()
    if entity is None:
        return False
    if entity.deleted_at is None:
        entity.deleted_at = utcnow()
        await db.flush()
        logger.info("entity.soft_deleted", table=model.__tablename__, id=entity_id)
    return True


async def list_linked_items(
    db: AsyncSession,
    link_model: Type[Any],
    owner_column: Any,
    owner_id: str,
    target_column: Any,
    target_model: Type[Any],
) -> List[AssignedItemOut]:
    """
    Catalog items linked to an owner through a junction table, oldest link first.
    Niche targets also carry their industry name.
    """
    notes_column = getattr(link_model, "notes", None)
    columns = [
        link_model.id,
        target_model.id,
        target_model.name,
        notes_column if notes_column is not None else literal(None).label("notes"),
    ]
    q = select(*columns).join(target_model, target_column == target_model.id)
    if target_model is Niche:
        q = q.add_columns(Industry.name.label("industry_name")).join(
            Industry, Niche.industry_id == Industry.id
        )
    q = q.where(owner_column == owner_id).order_by(link_model.created_at)
    r = await db.execute(q)
    items: List[AssignedItemOut] = []
    for row in r.all():
        items.append(
            AssignedItemOut(
                assignment_id=row[0],
                id=row[1],
                name=row[2],
                notes=row[3],
                industry_name=row[4] if len(row) > 4 else None,
            )
        )
    return items
