"""
Project service: CRUD, status progression, tool assignment.
advance() walks planning -> in_progress -> review -> completed one step at a time;
on_hold / cancelled are only reachable through set_project_status().
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import utcnow
from catalog_admin.logging_config import get_logger
from catalog_admin.models import Company, Project, ProjectTool, Tool
from catalog_admin.schemas.project import (
    AdvanceResult,
    ProjectCreate,
    ProjectOut,
    ProjectStatusUpdate,
    ProjectToolCreate,
    ProjectToolOut,
    ProjectUpdate,
)
from catalog_admin.services.common import apply_search, find_by_id_or_name, flush_or_raise, soft_delete

logger = get_logger(__name__)

STATUS_ORDER = ("planning", "in_progress", "review", "completed")
FINAL_STATUS_REASON = "Already at final status"


def next_status(current: str) -> Optional[str]:
    """Next status in the linear order, or None if current is last or off the line."""
    if current not in STATUS_ORDER:
        return None
    idx = STATUS_ORDER.index(current)
    if idx >= len(STATUS_ORDER) - 1:
        return None
    return STATUS_ORDER[idx + 1]


def _project_select():
    return select(Project, Company.name).outerjoin(Company, Project.company_id == Company.id)


def _project_out(project: Project, company_name: Optional[str]) -> ProjectOut:
    out = ProjectOut.model_validate(project)
    out.company_name = company_name
    return out


async def _get_live(db: AsyncSession, project_id: str) -> Optional[Project]:
    r = await db.execute(
        select(Project).where(Project.id == project_id, Project.deleted_at.is_(None))
    )
    return r.scalar_one_or_none()


async def get_project(db: AsyncSession, project_id: str) -> Optional[ProjectOut]:
    """Live project by id, with company_name."""
    r = await db.execute(
        _project_select().where(Project.id == project_id, Project.deleted_at.is_(None))
    )
    row = r.first()
    if row is None:
        return None
    project, company_name = row
    return _project_out(project, company_name)


async def find_project(db: AsyncSession, ref: str) -> Optional[ProjectOut]:
    """Live project by id, then by exact name (oldest first). Names are not unique."""
    row = await find_by_id_or_name(db, Project, ref, stmt=_project_select())
    if row is None:
        return None
    project, company_name = row
    return _project_out(project, company_name)


async def create_project(db: AsyncSession, payload: ProjectCreate) -> ProjectOut:
    """
    Create a project in status planning. The caller resolves company_id first;
    an unknown id surfaces as ReferentialIntegrityError from the foreign key.
    """
    project = Project(
        company_id=payload.company_id,
        name=payload.name,
        description=payload.description,
        start_date=payload.start_date,
        target_date=payload.target_date,
    )
    db.add(project)
    await flush_or_raise(db, "project")
    await db.refresh(project)
    logger.info("project.created", project_id=project.id, company_id=project.company_id, name=project.name)
    return await get_project(db, project.id)


async def list_projects(
    db: AsyncSession,
    company_id: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[ProjectOut]:
    """Live projects, oldest first, company name joined in."""
    q = _project_select().where(Project.deleted_at.is_(None))
    if company_id:
        q = q.where(Project.company_id == company_id)
    if status:
        q = q.where(Project.status == status)
    q = apply_search(q, search, Project.name, Project.description).order_by(Project.created_at)
    r = await db.execute(q)
    return [_project_out(p, company_name) for p, company_name in r.all()]


async def update_project(
    db: AsyncSession,
    project_id: str,
    payload: ProjectUpdate,
) -> Optional[ProjectOut]:
    """Write only fields present in payload. Owner company cannot change."""
    project = await _get_live(db, project_id)
    if project is None:
        return None
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(project, field, value)
    project.updated_at = utcnow()
    await flush_or_raise(db, "project")
    logger.info("project.updated", project_id=project_id, fields=sorted(changes))
    return await get_project(db, project_id)


async def advance_project(db: AsyncSession, project_id: str) -> Optional[AdvanceResult]:
    """
    Move one step along STATUS_ORDER. Entering completed stamps completed_date (today).
    At completed, on_hold or cancelled nothing is written and advanced=False.
    Returns None when the project does not exist.
    """
    project = await _get_live(db, project_id)
    if project is None:
        return None

    new_status = next_status(project.status)
    if new_status is None:
        current = await get_project(db, project_id)
        return AdvanceResult(project=current, advanced=False, reason=FINAL_STATUS_REASON)

    previous = project.status
    project.status = new_status
    project.updated_at = utcnow()
    if new_status == "completed":
        project.completed_date = utcnow().date()
    await flush_or_raise(db, "project")
    logger.info("project.advanced", project_id=project_id, from_status=previous, to_status=new_status)
    updated = await get_project(db, project_id)
    return AdvanceResult(project=updated, advanced=True, new_status=new_status)


async def set_project_status(db: AsyncSession, project_id: str, status: str) -> Optional[ProjectOut]:
    """Set any status directly (no ordering check). Raises ValidationError on unknown value."""
    status = ProjectStatusUpdate(status=status).status
    project = await _get_live(db, project_id)
    if project is None:
        return None
    previous = project.status
    project.status = status
    project.updated_at = utcnow()
    await flush_or_raise(db, "project")
    logger.info("project.status_set", project_id=project_id, from_status=previous, to_status=status)
    return await get_project(db, project_id)


async def delete_project(db: AsyncSession, project_id: str) -> bool:
    return await soft_delete(db, Project, project_id)


async def assign_tool(db: AsyncSession, project_id: str, payload: ProjectToolCreate) -> ProjectToolOut:
    """Insert one project-tool row; the same tool may be assigned more than once."""
    pt = ProjectTool(
        project_id=project_id,
        tool_id=payload.tool_id,
        config_json=payload.config_json,
        notes=payload.notes,
    )
    db.add(pt)
    await flush_or_raise(db, "project tool")
    await db.refresh(pt)
    logger.info("project.tool_assigned", project_id=project_id, tool_id=payload.tool_id)
    return ProjectToolOut.model_validate(pt)


async def list_project_tools(db: AsyncSession, project_id: str) -> List[ProjectToolOut]:
    """Tool assignments of a project with tool name and category, oldest first."""
    r = await db.execute(
        select(ProjectTool, Tool.name, Tool.category)
        .join(Tool, ProjectTool.tool_id == Tool.id)
        .where(ProjectTool.project_id == project_id)
        .order_by(ProjectTool.created_at)
    )
    out: List[ProjectToolOut] = []
    for pt, tool_name, tool_category in r.all():
        item = ProjectToolOut.model_validate(pt)
        item.tool_name = tool_name
        item.tool_category = tool_category
        out.append(item)
    return out
