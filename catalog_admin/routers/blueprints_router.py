"""Blueprints API: templates, steps, tools, industry/niche tags, apply to a company."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import get_db
from catalog_admin.routers.common import deleted_or_404, found_or_404
from catalog_admin.schemas.blueprint import (
    ApplyBlueprintRequest,
    ApplyBlueprintResult,
    BlueprintCreate,
    BlueprintDetailOut,
    BlueprintOut,
    BlueprintStepBody,
    BlueprintStepCreate,
    BlueprintStepOut,
    BlueprintTagCreate,
    BlueprintToolBody,
    BlueprintToolCreate,
    BlueprintToolOut,
)
from catalog_admin.schemas.common import DeleteResponse, MessageResponse
from catalog_admin.schemas.company import AssignedItemOut
from catalog_admin.services import blueprint_service

router = APIRouter(prefix="/api/blueprints", tags=["blueprints"])


async def _require_blueprint(db: AsyncSession, ref: str) -> BlueprintDetailOut:
    return found_or_404(await blueprint_service.get_blueprint(db, ref), "Blueprint")


@router.post("", response_model=BlueprintOut, status_code=status.HTTP_201_CREATED)
async def post_blueprint(payload: BlueprintCreate, db: AsyncSession = Depends(get_db)) -> BlueprintOut:
    return await blueprint_service.create_blueprint(db, payload)


@router.get("", response_model=list[BlueprintOut])
async def get_blueprints(
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[BlueprintOut]:
    return await blueprint_service.list_blueprints(db, search=search)


@router.get("/{ref}", response_model=BlueprintDetailOut)
async def get_blueprint(ref: str, db: AsyncSession = Depends(get_db)) -> BlueprintDetailOut:
    """Blueprint by id or name with steps, tools and tags."""
    return await _require_blueprint(db, ref)


@router.delete("/{blueprint_id}", response_model=DeleteResponse)
async def delete_blueprint(blueprint_id: str, db: AsyncSession = Depends(get_db)) -> DeleteResponse:
    return deleted_or_404(await blueprint_service.delete_blueprint(db, blueprint_id), blueprint_id, "Blueprint")


@router.post("/{ref}/steps", response_model=BlueprintStepOut, status_code=status.HTTP_201_CREATED)
async def post_step(
    ref: str,
    payload: BlueprintStepBody,
    db: AsyncSession = Depends(get_db),
) -> BlueprintStepOut:
    bp = await _require_blueprint(db, ref)
    step = BlueprintStepCreate(blueprint_id=bp.id, **payload.model_dump())
    return await blueprint_service.add_step(db, step)


@router.post("/{ref}/tools", response_model=BlueprintToolOut, status_code=status.HTTP_201_CREATED)
async def post_tool(
    ref: str,
    payload: BlueprintToolBody,
    db: AsyncSession = Depends(get_db),
) -> BlueprintToolOut:
    """Unknown tool_id: 409."""
    bp = await _require_blueprint(db, ref)
    bt = BlueprintToolCreate(blueprint_id=bp.id, **payload.model_dump())
    return await blueprint_service.add_tool(db, bt)


@router.post("/{ref}/industries", response_model=AssignedItemOut, status_code=status.HTTP_201_CREATED)
async def post_industry_tag(
    ref: str,
    payload: BlueprintTagCreate,
    db: AsyncSession = Depends(get_db),
) -> AssignedItemOut:
    bp = await _require_blueprint(db, ref)
    return await blueprint_service.assign_industry(db, bp.id, payload.ref_id)


@router.delete("/{ref}/industries/{industry_id}", response_model=MessageResponse)
async def delete_industry_tag(ref: str, industry_id: str, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    bp = await _require_blueprint(db, ref)
    removed = await blueprint_service.remove_industry(db, bp.id, industry_id)
    found_or_404(removed or None, "Industry tag")
    return MessageResponse(message="removed")


@router.post("/{ref}/niches", response_model=AssignedItemOut, status_code=status.HTTP_201_CREATED)
async def post_niche_tag(
    ref: str,
    payload: BlueprintTagCreate,
    db: AsyncSession = Depends(get_db),
) -> AssignedItemOut:
    bp = await _require_blueprint(db, ref)
    return await blueprint_service.assign_niche(db, bp.id, payload.ref_id)


@router.delete("/{ref}/niches/{niche_id}", response_model=MessageResponse)
async def delete_niche_tag(ref: str, niche_id: str, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    bp = await _require_blueprint(db, ref)
    removed = await blueprint_service.remove_niche(db, bp.id, niche_id)
    found_or_404(removed or None, "Niche tag")
    return MessageResponse(message="removed")


@router.post("/{ref}/apply", response_model=ApplyBlueprintResult, status_code=status.HTTP_201_CREATED)
async def post_apply(
    ref: str,
    payload: ApplyBlueprintRequest,
    db: AsyncSession = Depends(get_db),
) -> ApplyBlueprintResult:
    """Scaffold a project for the company (id or name). 404 if blueprint or company is missing."""
    result = await blueprint_service.apply_blueprint(db, ref, payload.company, payload.project_name)
    return found_or_404(result, "Blueprint or company")
