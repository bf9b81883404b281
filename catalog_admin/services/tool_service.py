"""Tool registry service."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.logging_config import get_logger
from catalog_admin.models import Tool
from catalog_admin.schemas.tool import ToolCreate, ToolOut
from catalog_admin.services.common import (
    apply_search,
    find_by_id_or_name,
    flush_or_raise,
    soft_delete,
)

logger = get_logger(__name__)


async def create_tool(db: AsyncSession, payload: ToolCreate) -> ToolOut:
    """Register a tool. Raises UniqueConstraintViolation on duplicate name."""
    tool = Tool(
        name=payload.name,
        category=payload.category,
        url=payload.url,
        description=payload.description,
    )
    db.add(tool)
    await flush_or_raise(db, "tool")
    await db.refresh(tool)
    logger.info("tool.created", tool_id=tool.id, name=tool.name, category=tool.category)
    return ToolOut.model_validate(tool)


async def list_tools(
    db: AsyncSession,
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> List[ToolOut]:
    """Live tools ordered by name; category is an exact match."""
    q = select(Tool).where(Tool.deleted_at.is_(None))
    if category:
        q = q.where(Tool.category == category)
    q = apply_search(q, search, Tool.name, Tool.description).order_by(Tool.name)
    r = await db.execute(q)
    return [ToolOut.model_validate(t) for t in r.scalars().all()]


async def get_tool(db: AsyncSession, ref: str) -> Optional[ToolOut]:
    row = await find_by_id_or_name(db, Tool, ref)
    return ToolOut.model_validate(row[0]) if row else None


async def delete_tool(db: AsyncSession, tool_id: str) -> bool:
    return await soft_delete(db, Tool, tool_id)
