"""Tool registry API."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import get_db
from catalog_admin.routers.common import deleted_or_404, found_or_404
from catalog_admin.schemas.common import DeleteResponse, ToolCategory
from catalog_admin.schemas.tool import ToolCreate, ToolOut
from catalog_admin.services import tool_service

router = APIRouter(prefix="/api/tools", tags=["tools"])


@router.post("", response_model=ToolOut, status_code=status.HTTP_201_CREATED)
async def post_tool(payload: ToolCreate, db: AsyncSession = Depends(get_db)) -> ToolOut:
    return await tool_service.create_tool(db, payload)


@router.get("", response_model=list[ToolOut])
async def get_tools(
    search: Optional[str] = Query(None),
    category: Optional[ToolCategory] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[ToolOut]:
    return await tool_service.list_tools(db, search=search, category=category)


@router.get("/{ref}", response_model=ToolOut)
async def get_tool(ref: str, db: AsyncSession = Depends(get_db)) -> ToolOut:
    return found_or_404(await tool_service.get_tool(db, ref), "Tool")


@router.delete("/{tool_id}", response_model=DeleteResponse)
async def delete_tool(tool_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    return deleted_or_404(await tool_service.delete_tool(db, tool_id), tool_id, "Tool")
