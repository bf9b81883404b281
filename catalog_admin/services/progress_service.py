"""Progress service: append-only project timeline."""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.logging_config import get_logger
from catalog_admin.models import ProgressLog
from catalog_admin.schemas.progress import ProgressLogCreate, ProgressLogOut
from catalog_admin.services.common import flush_or_raise

logger = get_logger(__name__)


async def log_progress(db: AsyncSession, payload: ProgressLogCreate) -> ProgressLogOut:
    """
    Append one timeline entry (logged_at = now). Entries are never updated or deleted.
    Caller commits session.
    """
    entry = ProgressLog(
        project_id=payload.project_id,
        phase=payload.phase,
        status=payload.status,
        note=payload.note,
        logged_by=payload.logged_by,
    )
    db.add(entry)
    await flush_or_raise(db, "progress log")
    await db.refresh(entry)
    logger.info(
        "progress.logged",
        project_id=entry.project_id,
        phase=entry.phase,
        status=entry.status,
    )
    return ProgressLogOut.model_validate(entry)


async def get_timeline(db: AsyncSession, project_id: str) -> List[ProgressLogOut]:
    """All entries of a project, newest first."""
    q = (
        select(ProgressLog)
        .where(ProgressLog.project_id == project_id)
        .order_by(ProgressLog.logged_at.desc(), ProgressLog.created_at.desc())
    )
    r = await db.execute(q)
    return [ProgressLogOut.model_validate(e) for e in r.scalars().all()]
