"""blueprint command group: templates, steps, tools, tags, apply."""
from typing import Optional

import typer
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.cli._runtime import (
    build,
    console,
    print_fields,
    print_table,
    require,
    resolve_id,
    run,
    success,
)
from catalog_admin.models import Blueprint, Industry, Niche, Tool
from catalog_admin.schemas.blueprint import (
    BlueprintCreate,
    BlueprintStepBody,
    BlueprintStepCreate,
    BlueprintToolCreate,
)
from catalog_admin.services import blueprint_service

blueprint_app = typer.Typer(help="Manage blueprints (reusable project templates).", no_args_is_help=True)


@blueprint_app.command("add")
def blueprint_add(
    name: str = typer.Option(..., "--name", "-n"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
) -> None:
    payload = build(BlueprintCreate, name=name, description=description)
    bp = run(lambda db: blueprint_service.create_blueprint(db, payload))
    success(f"Created blueprint {bp.name} ({bp.id})")


@blueprint_app.command("list")
def blueprint_list(search: Optional[str] = typer.Option(None, "--search", "-s")) -> None:
    blueprints = run(lambda db: blueprint_service.list_blueprints(db, search=search))
    print_table("Blueprints", ["ID", "Name", "Description"], [(b.id, b.name, b.description) for b in blueprints])


@blueprint_app.command("show")
def blueprint_show(ref: str = typer.Argument(..., help="ID or name")) -> None:
    bp = require(run(lambda db: blueprint_service.get_blueprint(db, ref)), "Blueprint", ref)
    print_fields(bp.name, [("ID", bp.id), ("Description", bp.description)])
    print_table("Steps", ["#", "Title", "Description"], [(s.step_order, s.title, s.description) for s in bp.steps])
    print_table(
        "Tools",
        ["Tool", "Role", "Notes"],
        [(t.tool_name, t.role_in_blueprint, t.notes) for t in bp.tools],
    )
    print_table("Industries", ["ID", "Name"], [(i.id, i.name) for i in bp.industries])
    print_table("Niches", ["ID", "Name", "Industry"], [(n.id, n.name, n.industry_name) for n in bp.niches])


@blueprint_app.command("add-step")
def blueprint_add_step(
    ref: str = typer.Argument(..., help="Blueprint ID or name"),
    title: str = typer.Option(..., "--title"),
    step_order: int = typer.Option(..., "--order", "-o", help="1-based position"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
) -> None:
    body = build(BlueprintStepBody, step_order=step_order, title=title, description=description)

    async def work(db: AsyncSession):
        blueprint_id = await resolve_id(db, Blueprint, ref, "Blueprint")
        return await blueprint_service.add_step(db, BlueprintStepCreate(blueprint_id=blueprint_id, **body.model_dump()))

    step = run(work)
    success(f"Added step {step.step_order}: {step.title}")


@blueprint_app.command("add-tool")
def blueprint_add_tool(
    ref: str = typer.Argument(..., help="Blueprint ID or name"),
    tool: str = typer.Argument(..., help="Tool ID or name"),
    role: Optional[str] = typer.Option(None, "--role"),
    notes: Optional[str] = typer.Option(None, "--notes"),
) -> None:
    async def work(db: AsyncSession):
        payload = build(
            BlueprintToolCreate,
            blueprint_id=await resolve_id(db, Blueprint, ref, "Blueprint"),
            tool_id=await resolve_id(db, Tool, tool, "Tool"),
            role_in_blueprint=role,
            notes=notes,
        )
        return await blueprint_service.add_tool(db, payload)

    bt = run(work)
    success(f"Added tool {bt.tool_name} ({bt.id})")


@blueprint_app.command("assign-industry")
def blueprint_assign_industry(
    ref: str = typer.Argument(..., help="Blueprint ID or name"),
    industry: str = typer.Argument(..., help="Industry ID or name"),
) -> None:
    async def work(db: AsyncSession):
        blueprint_id = await resolve_id(db, Blueprint, ref, "Blueprint")
        industry_id = await resolve_id(db, Industry, industry, "Industry")
        return await blueprint_service.assign_industry(db, blueprint_id, industry_id)

    item = run(work)
    success(f"Tagged with industry {item.name}")


@blueprint_app.command("assign-niche")
def blueprint_assign_niche(
    ref: str = typer.Argument(..., help="Blueprint ID or name"),
    niche: str = typer.Argument(..., help="Niche ID or name"),
) -> None:
    async def work(db: AsyncSession):
        blueprint_id = await resolve_id(db, Blueprint, ref, "Blueprint")
        niche_id = await resolve_id(db, Niche, niche, "Niche")
        return await blueprint_service.assign_niche(db, blueprint_id, niche_id)

    item = run(work)
    success(f"Tagged with niche {item.name}")


@blueprint_app.command("remove-industry")
def blueprint_remove_industry(
    ref: str = typer.Argument(..., help="Blueprint ID or name"),
    industry: str = typer.Argument(..., help="Industry ID or name"),
) -> None:
    async def work(db: AsyncSession):
        blueprint_id = await resolve_id(db, Blueprint, ref, "Blueprint")
        industry_id = await resolve_id(db, Industry, industry, "Industry")
        return await blueprint_service.remove_industry(db, blueprint_id, industry_id)

    if run(work):
        success(f"Removed industry {industry}")
    else:
        console.print(f"[yellow]Blueprint was not tagged with {industry}[/]")


@blueprint_app.command("remove-niche")
def blueprint_remove_niche(
    ref: str = typer.Argument(..., help="Blueprint ID or name"),
    niche: str = typer.Argument(..., help="Niche ID or name"),
) -> None:
    async def work(db: AsyncSession):
        blueprint_id = await resolve_id(db, Blueprint, ref, "Blueprint")
        niche_id = await resolve_id(db, Niche, niche, "Niche")
        return await blueprint_service.remove_niche(db, blueprint_id, niche_id)

    if run(work):
        success(f"Removed niche {niche}")
    else:
        console.print(f"[yellow]Blueprint was not tagged with {niche}[/]")


@blueprint_app.command("apply")
def blueprint_apply(
    ref: str = typer.Argument(..., help="Blueprint ID or name"),
    company: str = typer.Option(..., "--company", "-c", help="Company ID or name"),
    project_name: Optional[str] = typer.Option(None, "--project-name", "-n"),
) -> None:
    """Create a project for the company with the blueprint's tools."""
    result = require(
        run(lambda db: blueprint_service.apply_blueprint(db, ref, company, project_name)),
        "Blueprint or company",
        f"{ref} / {company}",
    )
    success(f"Created project {result.project.name} ({result.project.id})")
    console.print(f"  {len(result.blueprint.tools)} tool(s) copied from {result.blueprint.name}")


@blueprint_app.command("delete")
def blueprint_delete(blueprint_id: str = typer.Argument(..., help="ID")) -> None:
    require(run(lambda db: blueprint_service.delete_blueprint(db, blueprint_id)) or None, "Blueprint", blueprint_id)
    success(f"Deleted blueprint {blueprint_id}")
