"""Read-only aggregates for the dashboard home, analytics and kanban pages."""
from typing import Dict, List

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.models import (
    Blueprint,
    Company,
    CompanyIndustry,
    Industry,
    ProgressLog,
    Project,
    ProjectTool,
    Tool,
)
from catalog_admin.schemas.dashboard import (
    AnalyticsOut,
    DashboardSummary,
    EntityCounts,
    IndustryProjectStats,
    KanbanBoard,
    KanbanCard,
    RecentLog,
    StatusCount,
    ToolUsage,
)
from catalog_admin.services.project_service import STATUS_ORDER

RECENT_LOG_LIMIT = 5
TOP_TOOLS_LIMIT = 10


async def _count_live(db: AsyncSession, model) -> int:
    r = await db.execute(select(func.count(model.id)).where(model.deleted_at.is_(None)))
    return r.scalar() or 0


async def _status_distribution(db: AsyncSession) -> List[StatusCount]:
    r = await db.execute(
        select(Project.status, func.count(Project.id))
        .where(Project.deleted_at.is_(None))
        .group_by(Project.status)
        .order_by(Project.status)
    )
    return [StatusCount(status=status, count=n) for status, n in r.all()]


async def dashboard_summary(db: AsyncSession) -> DashboardSummary:
    """Live entity counts, project status distribution and the latest progress entries."""
    counts = EntityCounts(
        companies=await _count_live(db, Company),
        projects=await _count_live(db, Project),
        tools=await _count_live(db, Tool),
        blueprints=await _count_live(db, Blueprint),
    )
    r = await db.execute(
        select(ProgressLog, Project.name)
        .join(Project, ProgressLog.project_id == Project.id)
        .order_by(ProgressLog.logged_at.desc(), ProgressLog.created_at.desc())
        .limit(RECENT_LOG_LIMIT)
    )
    recent = [
        RecentLog(
            project_id=log.project_id,
            project_name=project_name,
            phase=log.phase,
            note=log.note,
            logged_at=log.logged_at,
        )
        for log, project_name in r.all()
    ]
    return DashboardSummary(
        counts=counts,
        status_distribution=await _status_distribution(db),
        recent_logs=recent,
    )


async def analytics(db: AsyncSession) -> AnalyticsOut:
    """
    by_industry: live projects per industry of the owning company, with completed count
    (a company in two industries counts in both). tool_usage: top tools by assignments.
    """
    completed = func.count(case((Project.status == "completed", Project.id)))
    r = await db.execute(
        select(Industry.name, func.count(Project.id), completed)
        .select_from(Industry)
        .join(CompanyIndustry, CompanyIndustry.industry_id == Industry.id)
        .join(Company, CompanyIndustry.company_id == Company.id)
        .join(Project, Project.company_id == Company.id)
        .where(Project.deleted_at.is_(None))
        .group_by(Industry.name)
        .order_by(func.count(Project.id).desc(), Industry.name)
    )
    by_industry = [
        IndustryProjectStats(industry=name, total=total, completed=done)
        for name, total, done in r.all()
    ]

    usage = func.count(ProjectTool.id)
    r = await db.execute(
        select(Tool.id, Tool.name, usage)
        .outerjoin(ProjectTool, ProjectTool.tool_id == Tool.id)
        .where(Tool.deleted_at.is_(None))
        .group_by(Tool.id, Tool.name)
        .order_by(usage.desc(), Tool.name)
        .limit(TOP_TOOLS_LIMIT)
    )
    tool_usage = [ToolUsage(tool_id=tid, name=name, count=n) for tid, name, n in r.all()]

    return AnalyticsOut(
        by_industry=by_industry,
        tool_usage=tool_usage,
        projects_by_status=await _status_distribution(db),
    )


async def projects_by_status(db: AsyncSession) -> KanbanBoard:
    """Live projects in the four linear columns, most recently updated first. on_hold/cancelled are left out."""
    r = await db.execute(
        select(Project, Company.name)
        .join(Company, Project.company_id == Company.id)
        .where(Project.deleted_at.is_(None), Project.status.in_(STATUS_ORDER))
        .order_by(Project.updated_at.desc())
    )
    columns: Dict[str, List[KanbanCard]] = {status: [] for status in STATUS_ORDER}
    for project, company_name in r.all():
        columns[project.status].append(
            KanbanCard(
                id=project.id,
                name=project.name,
                status=project.status,
                company_name=company_name,
                target_date=project.target_date,
            )
        )
    return KanbanBoard(columns=columns)
