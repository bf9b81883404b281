"""Projects API: CRUD, status progression, tools, progress timeline, implementation details."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import get_db
from catalog_admin.routers.common import deleted_or_404, found_or_404
from catalog_admin.schemas.common import DeleteResponse, ImplType, ProjectStatus
from catalog_admin.schemas.implementation import (
    ImplementationDetailBody,
    ImplementationDetailCreate,
    ImplementationDetailOut,
    ImplementationDetailUpdate,
)
from catalog_admin.schemas.progress import ProgressLogBody, ProgressLogCreate, ProgressLogOut
from catalog_admin.schemas.project import (
    AdvanceResult,
    ProjectCreate,
    ProjectOut,
    ProjectStatusUpdate,
    ProjectToolCreate,
    ProjectToolOut,
    ProjectUpdate,
)
from catalog_admin.services import implementation_service, progress_service, project_service

router = APIRouter(prefix="/api/projects", tags=["projects"])
details_router = APIRouter(prefix="/api/details", tags=["projects"])


async def _require_project(db: AsyncSession, project_id: str) -> ProjectOut:
    return found_or_404(await project_service.get_project(db, project_id), "Project")


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
async def post_project(payload: ProjectCreate, db: AsyncSession = Depends(get_db)) -> ProjectOut:
    """New project in status planning. Unknown company_id: 409."""
    return await project_service.create_project(db, payload)


@router.get("", response_model=list[ProjectOut])
async def get_projects(
    company_id: Optional[str] = Query(None),
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[ProjectOut]:
    return await project_service.list_projects(db, company_id=company_id, status=status_filter, search=search)


@router.get("/{project_id}", response_model=ProjectOut)
async def get_project(project_id: str, db: AsyncSession = Depends(get_db)) -> ProjectOut:
    return await _require_project(db, project_id)


@router.patch("/{project_id}", response_model=ProjectOut)
async def patch_project(
    project_id: str,
    payload: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
) -> ProjectOut:
    return found_or_404(await project_service.update_project(db, project_id, payload), "Project")


@router.delete("/{project_id}", response_model=DeleteResponse)
async def delete_project(project_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    return deleted_or_404(await project_service.delete_project(db, project_id), project_id, "Project")


@router.post("/{project_id}/advance", response_model=AdvanceResult)
async def post_advance(project_id: str, db: AsyncSession = Depends(get_db)) -> AdvanceResult:
    """One step along planning -> in_progress -> review -> completed. 200 with advanced=false at the end."""
    return found_or_404(await project_service.advance_project(db, project_id), "Project")


@router.put("/{project_id}/status", response_model=ProjectOut)
async def put_status(
    project_id: str,
    payload: ProjectStatusUpdate,
    db: AsyncSession = Depends(get_db),
) -> ProjectOut:
    return found_or_404(await project_service.set_project_status(db, project_id, payload.status), "Project")


@router.post("/{project_id}/tools", response_model=ProjectToolOut, status_code=status.HTTP_201_CREATED)
async def post_project_tool(
    project_id: str,
    payload: ProjectToolCreate,
    db: AsyncSession = Depends(get_db),
) -> ProjectToolOut:
    await _require_project(db, project_id)
    return await project_service.assign_tool(db, project_id, payload)


@router.get("/{project_id}/tools", response_model=list[ProjectToolOut])
async def get_project_tools(project_id: str, db: AsyncSession = Depends(get_db)) -> list[ProjectToolOut]:
    await _require_project(db, project_id)
    return await project_service.list_project_tools(db, project_id)


@router.post("/{project_id}/progress", response_model=ProgressLogOut, status_code=status.HTTP_201_CREATED)
async def post_progress(
    project_id: str,
    payload: ProgressLogBody,
    db: AsyncSession = Depends(get_db),
) -> ProgressLogOut:
    await _require_project(db, project_id)
    entry = ProgressLogCreate(project_id=project_id, **payload.model_dump())
    return await progress_service.log_progress(db, entry)


@router.get("/{project_id}/progress", response_model=list[ProgressLogOut])
async def get_progress(project_id: str, db: AsyncSession = Depends(get_db)) -> list[ProgressLogOut]:
    """Timeline, newest first."""
    await _require_project(db, project_id)
    return await progress_service.get_timeline(db, project_id)


@router.post(
    "/{project_id}/details",
    response_model=ImplementationDetailOut,
    status_code=status.HTTP_201_CREATED,
)
async def post_detail(
    project_id: str,
    payload: ImplementationDetailBody,
    db: AsyncSession = Depends(get_db),
) -> ImplementationDetailOut:
    await _require_project(db, project_id)
    detail = ImplementationDetailCreate(project_id=project_id, **payload.model_dump())
    return await implementation_service.create_detail(db, detail)


@router.get("/{project_id}/details", response_model=list[ImplementationDetailOut])
async def get_details(
    project_id: str,
    type: Optional[ImplType] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[ImplementationDetailOut]:
    await _require_project(db, project_id)
    return await implementation_service.list_details(db, project_id, type=type)


@details_router.get("/{detail_id}", response_model=ImplementationDetailOut)
async def get_detail(detail_id: str, db: AsyncSession = Depends(get_db)) -> ImplementationDetailOut:
    return found_or_404(await implementation_service.get_detail(db, detail_id), "Implementation detail")


@details_router.patch("/{detail_id}", response_model=ImplementationDetailOut)
async def patch_detail(
    detail_id: str,
    payload: ImplementationDetailUpdate,
    db: AsyncSession = Depends(get_db),
) -> ImplementationDetailOut:
    detail = await implementation_service.update_detail(db, detail_id, payload)
    return found_or_404(detail, "Implementation detail")


@details_router.delete("/{detail_id}", response_model=DeleteResponse)
async def delete_detail(detail_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    existed = await implementation_service.delete_detail(db, detail_id)
    return deleted_or_404(existed, detail_id, "Implementation detail")
