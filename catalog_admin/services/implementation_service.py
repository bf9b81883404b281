"""Implementation detail service: prompts, configs, API refs and notes attached to a project."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import utcnow
from catalog_admin.logging_config import get_logger
from catalog_admin.models import ImplementationDetail
from catalog_admin.schemas.implementation import (
    ImplementationDetailCreate,
    ImplementationDetailOut,
    ImplementationDetailUpdate,
)
from catalog_admin.services.common import flush_or_raise, soft_delete

logger = get_logger(__name__)


async def _get_live(db: AsyncSession, detail_id: str) -> Optional[ImplementationDetail]:
    r = await db.execute(
        select(ImplementationDetail).where(
            ImplementationDetail.id == detail_id,
            ImplementationDetail.deleted_at.is_(None),
        )
    )
    return r.scalar_one_or_none()


async def create_detail(db: AsyncSession, payload: ImplementationDetailCreate) -> ImplementationDetailOut:
    detail = ImplementationDetail(
        project_id=payload.project_id,
        type=payload.type,
        title=payload.title,
        content=payload.content,
        metadata_json=payload.metadata_json,
        sort_order=payload.sort_order,
    )
    db.add(detail)
    await flush_or_raise(db, "implementation detail")
    await db.refresh(detail)
    logger.info("impl.created", detail_id=detail.id, project_id=detail.project_id, type=detail.type)
    return ImplementationDetailOut.model_validate(detail)


async def list_details(
    db: AsyncSession,
    project_id: str,
    type: Optional[str] = None,
) -> List[ImplementationDetailOut]:
    """Live details of a project by sort_order, then created_at."""
    q = select(ImplementationDetail).where(
        ImplementationDetail.project_id == project_id,
        ImplementationDetail.deleted_at.is_(None),
    )
    if type:
        q = q.where(ImplementationDetail.type == type)
    q = q.order_by(ImplementationDetail.sort_order.asc(), ImplementationDetail.created_at.asc())
    r = await db.execute(q)
    return [ImplementationDetailOut.model_validate(d) for d in r.scalars().all()]


async def get_detail(db: AsyncSession, detail_id: str) -> Optional[ImplementationDetailOut]:
    detail = await _get_live(db, detail_id)
    return ImplementationDetailOut.model_validate(detail) if detail else None


async def update_detail(
    db: AsyncSession,
    detail_id: str,
    payload: ImplementationDetailUpdate,
) -> Optional[ImplementationDetailOut]:
    detail = await _get_live(db, detail_id)
    if detail is None:
        return None
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(detail, field, value)
    detail.updated_at = utcnow()
    await flush_or_raise(db, "implementation detail")
    await db.refresh(detail)
    logger.info("impl.updated", detail_id=detail_id, fields=sorted(changes))
    return ImplementationDetailOut.model_validate(detail)


async def delete_detail(db: AsyncSession, detail_id: str) -> bool:
    return await soft_delete(db, ImplementationDetail, detail_id)
