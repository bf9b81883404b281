"""
Blueprint service: reusable project templates.

A blueprint holds ordered steps, tool roles and industry/niche tags.
apply_blueprint() scaffolds a new project for a company from it: one project row plus
one project-tool row per blueprint tool, written in a single SAVEPOINT.
Caller commits session.
"""
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.exceptions import translate_integrity_error
from catalog_admin.logging_config import get_logger
from catalog_admin.models import (
    Blueprint,
    BlueprintIndustry,
    BlueprintNiche,
    BlueprintStep,
    BlueprintTool,
    Company,
    Industry,
    Niche,
    Project,
    ProjectTool,
    Tool,
)
from catalog_admin.schemas.blueprint import (
    ApplyBlueprintResult,
    BlueprintCreate,
    BlueprintDetailOut,
    BlueprintOut,
    BlueprintStepCreate,
    BlueprintStepOut,
    BlueprintToolCreate,
    BlueprintToolOut,
)
from catalog_admin.schemas.company import AssignedItemOut
from catalog_admin.services.common import (
    apply_search,
    find_by_id_or_name,
    flush_or_raise,
    list_linked_items,
    soft_delete,
)
from catalog_admin.services.project_service import get_project

logger = get_logger(__name__)

APPLIED_NAME_SUFFIX = " (from blueprint)"


async def create_blueprint(db: AsyncSession, payload: BlueprintCreate) -> BlueprintOut:
    """Create a blueprint. Raises UniqueConstraintViolation on duplicate name."""
    bp = Blueprint(name=payload.name, description=payload.description)
    db.add(bp)
    await flush_or_raise(db, "blueprint")
    await db.refresh(bp)
    logger.info("blueprint.created", blueprint_id=bp.id, name=bp.name)
    return BlueprintOut.model_validate(bp)


async def list_blueprints(db: AsyncSession, search: Optional[str] = None) -> List[BlueprintOut]:
    q = select(Blueprint).where(Blueprint.deleted_at.is_(None))
    q = apply_search(q, search, Blueprint.name, Blueprint.description).order_by(Blueprint.name)
    r = await db.execute(q)
    return [BlueprintOut.model_validate(bp) for bp in r.scalars().all()]


async def _steps(db: AsyncSession, blueprint_id: str) -> List[BlueprintStepOut]:
    r = await db.execute(
        select(BlueprintStep)
        .where(BlueprintStep.blueprint_id == blueprint_id)
        .order_by(BlueprintStep.step_order, BlueprintStep.created_at)
    )
    return [BlueprintStepOut.model_validate(s) for s in r.scalars().all()]


async def _tools(db: AsyncSession, blueprint_id: str) -> List[BlueprintToolOut]:
    r = await db.execute(
        select(BlueprintTool, Tool.name)
        .join(Tool, BlueprintTool.tool_id == Tool.id)
        .where(BlueprintTool.blueprint_id == blueprint_id)
        .order_by(BlueprintTool.created_at)
    )
    out: List[BlueprintToolOut] = []
    for bt, tool_name in r.all():
        item = BlueprintToolOut.model_validate(bt)
        item.tool_name = tool_name
        out.append(item)
    return out


async def get_blueprint(db: AsyncSession, ref: str) -> Optional[BlueprintDetailOut]:
    """
    Look up by id, then by name. Loads steps (by step_order), tools (with tool name),
    industry and niche tags.
    """
    row = await find_by_id_or_name(db, Blueprint, ref)
    if row is None:
        return None
    bp: Blueprint = row[0]
    steps = await _steps(db, bp.id)
    tools = await _tools(db, bp.id)
    industries = await list_linked_items(
        db, BlueprintIndustry, BlueprintIndustry.blueprint_id, bp.id, BlueprintIndustry.industry_id, Industry
    )
    niches = await list_linked_items(
        db, BlueprintNiche, BlueprintNiche.blueprint_id, bp.id, BlueprintNiche.niche_id, Niche
    )
    return BlueprintDetailOut(
        **BlueprintOut.model_validate(bp).model_dump(),
        steps=steps,
        tools=tools,
        industries=industries,
        niches=niches,
    )


async def add_step(db: AsyncSession, payload: BlueprintStepCreate) -> BlueprintStepOut:
    """Append a step. step_order is taken as given (gaps and repeats allowed)."""
    step = BlueprintStep(
        blueprint_id=payload.blueprint_id,
        step_order=payload.step_order,
        title=payload.title,
        description=payload.description,
    )
    db.add(step)
    await flush_or_raise(db, "blueprint step")
    await db.refresh(step)
    logger.info("blueprint.step_added", blueprint_id=step.blueprint_id, step_order=step.step_order)
    return BlueprintStepOut.model_validate(step)


async def add_tool(db: AsyncSession, payload: BlueprintToolCreate) -> BlueprintToolOut:
    bt = BlueprintTool(
        blueprint_id=payload.blueprint_id,
        tool_id=payload.tool_id,
        role_in_blueprint=payload.role_in_blueprint,
        notes=payload.notes,
    )
    db.add(bt)
    await flush_or_raise(db, "blueprint tool")
    await db.refresh(bt)
    logger.info("blueprint.tool_added", blueprint_id=bt.blueprint_id, tool_id=bt.tool_id)
    out = BlueprintToolOut.model_validate(bt)
    r = await db.execute(select(Tool.name).where(Tool.id == bt.tool_id))
    out.tool_name = r.scalar_one_or_none()
    return out


async def assign_industry(db: AsyncSession, blueprint_id: str, industry_id: str) -> AssignedItemOut:
    """Tag the blueprint with an industry (duplicates allowed)."""
    row = BlueprintIndustry(blueprint_id=blueprint_id, industry_id=industry_id)
    db.add(row)
    await flush_or_raise(db, "industry")
    r = await db.execute(select(Industry.name).where(Industry.id == industry_id))
    logger.info("blueprint.industry_assigned", blueprint_id=blueprint_id, industry_id=industry_id)
    return AssignedItemOut(id=industry_id, name=r.scalar_one(), assignment_id=row.id)


async def assign_niche(db: AsyncSession, blueprint_id: str, niche_id: str) -> AssignedItemOut:
    row = BlueprintNiche(blueprint_id=blueprint_id, niche_id=niche_id)
    db.add(row)
    await flush_or_raise(db, "niche")
    r = await db.execute(
        select(Niche.name, Industry.name)
        .join(Industry, Niche.industry_id == Industry.id)
        .where(Niche.id == niche_id)
    )
    niche_name, industry_name = r.one()
    logger.info("blueprint.niche_assigned", blueprint_id=blueprint_id, niche_id=niche_id)
    return AssignedItemOut(id=niche_id, name=niche_name, assignment_id=row.id, industry_name=industry_name)


async def remove_industry(db: AsyncSession, blueprint_id: str, industry_id: str) -> bool:
    """Drop every tag row for this (blueprint, industry) pair. True if any existed."""
    r = await db.execute(
        delete(BlueprintIndustry).where(
            BlueprintIndustry.blueprint_id == blueprint_id,
            BlueprintIndustry.industry_id == industry_id,
        )
    )
    removed = (r.rowcount or 0) > 0
    logger.info("blueprint.industry_removed", blueprint_id=blueprint_id, industry_id=industry_id, removed=removed)
    return removed


async def remove_niche(db: AsyncSession, blueprint_id: str, niche_id: str) -> bool:
    r = await db.execute(
        delete(BlueprintNiche).where(
            BlueprintNiche.blueprint_id == blueprint_id,
            BlueprintNiche.niche_id == niche_id,
        )
    )
    removed = (r.rowcount or 0) > 0
    logger.info("blueprint.niche_removed", blueprint_id=blueprint_id, niche_id=niche_id, removed=removed)
    return removed


async def delete_blueprint(db: AsyncSession, blueprint_id: str) -> bool:
    return await soft_delete(db, Blueprint, blueprint_id)


async def apply_blueprint(
    db: AsyncSession,
    blueprint_ref: str,
    company_ref: str,
    project_name: Optional[str] = None,
) -> Optional[ApplyBlueprintResult]:
    """
    Create a project for the company from the blueprint.

    - project name: project_name, or "<blueprint name> (from blueprint)"
    - project description: the blueprint's description; status planning
    - one project-tool per blueprint tool, carrying tool_id and notes (role is not copied)

    Returns None, before any write, when the blueprint or the company is not found.
    All inserts share one SAVEPOINT: on failure neither the project nor any
    project-tool row remains.
    """
    blueprint = await get_blueprint(db, blueprint_ref)
    if blueprint is None:
        logger.info("blueprint.apply_skipped", reason="blueprint_not_found", ref=blueprint_ref)
        return None
    company_row = await find_by_id_or_name(db, Company, company_ref)
    if company_row is None:
        logger.info("blueprint.apply_skipped", reason="company_not_found", ref=company_ref)
        return None
    company: Company = company_row[0]

    project = Project(
        company_id=company.id,
        name=project_name or f"{blueprint.name}{APPLIED_NAME_SUFFIX}",
        description=blueprint.description,
    )
    try:
        async with db.begin_nested():
            db.add(project)
            await db.flush()
            db.add_all(
                [
                    ProjectTool(project_id=project.id, tool_id=bt.tool_id, notes=bt.notes)
                    for bt in blueprint.tools
                ]
            )
            await db.flush()
    except IntegrityError as exc:
        logger.warning("blueprint.apply_failed", blueprint_id=blueprint.id, company_id=company.id)
        raise translate_integrity_error(exc, "project") from exc

    logger.info(
        "blueprint.applied",
        blueprint_id=blueprint.id,
        company_id=company.id,
        project_id=project.id,
        tools_copied=len(blueprint.tools),
    )
    created = await get_project(db, project.id)
    return ApplyBlueprintResult(project=created, blueprint=blueprint)
