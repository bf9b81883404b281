"""Dashboard read models: home summary, analytics, projects kanban."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import get_db
from catalog_admin.schemas.dashboard import AnalyticsOut, DashboardSummary, KanbanBoard
from catalog_admin.services import dashboard_service

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard(db: AsyncSession = Depends(get_db)) -> DashboardSummary:
    return await dashboard_service.dashboard_summary(db)


@router.get("/analytics", response_model=AnalyticsOut)
async def get_analytics(db: AsyncSession = Depends(get_db)) -> AnalyticsOut:
    return await dashboard_service.analytics(db)


@router.get("/kanban", response_model=KanbanBoard)
async def get_kanban(db: AsyncSession = Depends(get_db)) -> KanbanBoard:
    """Live projects grouped by planning / in_progress / review / completed."""
    return await dashboard_service.projects_by_status(db)
