"""project, progress and impl command groups."""
import json
from typing import Any, Optional

import typer
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.cli._runtime import (
    build,
    console,
    fail,
    print_fields,
    print_table,
    require,
    resolve_id,
    run,
    success,
)
from catalog_admin.models import Company, Tool
from catalog_admin.schemas.implementation import ImplementationDetailCreate, ImplementationDetailUpdate
from catalog_admin.schemas.progress import ProgressLogBody, ProgressLogCreate
from catalog_admin.schemas.project import ProjectCreate, ProjectToolCreate
from catalog_admin.services import implementation_service, progress_service, project_service

project_app = typer.Typer(help="Manage client projects.", no_args_is_help=True)
progress_app = typer.Typer(help="Project progress timeline.", no_args_is_help=True)
impl_app = typer.Typer(help="Implementation details (prompts, configs, API refs, notes).", no_args_is_help=True)


def _parse_json(raw: Optional[str], option: str) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        fail(f"{option} is not valid JSON: {exc.msg}")


async def _project_id(db: AsyncSession, ref: str) -> str:
    project = require(await project_service.find_project(db, ref), "Project", ref)
    return project.id


@project_app.command("add")
def project_add(
    company: str = typer.Option(..., "--company", "-c", help="Company ID or name"),
    name: str = typer.Option(..., "--name", "-n"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    start_date: Optional[str] = typer.Option(None, "--start", help="YYYY-MM-DD"),
    target_date: Optional[str] = typer.Option(None, "--target", help="YYYY-MM-DD"),
) -> None:
    async def work(db: AsyncSession):
        company_id = await resolve_id(db, Company, company, "Company")
        payload = build(
            ProjectCreate,
            company_id=company_id,
            name=name,
            description=description,
            start_date=start_date,
            target_date=target_date,
        )
        return await project_service.create_project(db, payload)

    project = run(work)
    success(f"Created project {project.name} for {project.company_name} ({project.id})")


@project_app.command("list")
def project_list(
    company: Optional[str] = typer.Option(None, "--company", "-c", help="Company ID or name"),
    status: Optional[str] = typer.Option(None, "--status"),
    search: Optional[str] = typer.Option(None, "--search", "-s"),
) -> None:
    async def work(db: AsyncSession):
        company_id = await resolve_id(db, Company, company, "Company") if company else None
        return await project_service.list_projects(db, company_id=company_id, status=status, search=search)

    projects = run(work)
    print_table(
        "Projects",
        ["ID", "Name", "Company", "Status", "Target"],
        [(p.id, p.name, p.company_name, p.status, p.target_date) for p in projects],
    )


@project_app.command("show")
def project_show(ref: str = typer.Argument(..., help="ID or name")) -> None:
    async def work(db: AsyncSession):
        project = require(await project_service.find_project(db, ref), "Project", ref)
        tools = await project_service.list_project_tools(db, project.id)
        return project, tools

    project, tools = run(work)
    print_fields(
        project.name,
        [
            ("ID", project.id),
            ("Company", project.company_name),
            ("Status", project.status),
            ("Description", project.description),
            ("Start", project.start_date),
            ("Target", project.target_date),
            ("Completed", project.completed_date),
        ],
    )
    print_table(
        "Tools",
        ["ID", "Tool", "Category", "Notes"],
        [(t.id, t.tool_name, t.tool_category, t.notes) for t in tools],
    )


@project_app.command("advance")
def project_advance(ref: str = typer.Argument(..., help="ID or name")) -> None:
    """Move one step: planning -> in_progress -> review -> completed."""

    async def work(db: AsyncSession):
        return await project_service.advance_project(db, await _project_id(db, ref))

    result = run(work)
    if result.advanced:
        success(f"{result.project.name} advanced to {result.new_status}")
    else:
        console.print(f"[yellow]{result.reason}[/] ({result.project.status})")


@project_app.command("status")
def project_status(
    ref: str = typer.Argument(..., help="ID or name"),
    status: str = typer.Argument(..., help="planning | in_progress | review | completed | on_hold | cancelled"),
) -> None:
    """Set any status directly."""

    async def work(db: AsyncSession):
        return await project_service.set_project_status(db, await _project_id(db, ref), status)

    project = run(work)
    success(f"{project.name} is now {project.status}")


@project_app.command("assign-tool")
def project_assign_tool(
    ref: str = typer.Argument(..., help="Project ID or name"),
    tool: str = typer.Argument(..., help="Tool ID or name"),
    notes: Optional[str] = typer.Option(None, "--notes"),
    config: Optional[str] = typer.Option(None, "--config", help="JSON object"),
) -> None:
    config_json = _parse_json(config, "--config")

    async def work(db: AsyncSession):
        project_id = await _project_id(db, ref)
        tool_id = await resolve_id(db, Tool, tool, "Tool")
        payload = build(ProjectToolCreate, tool_id=tool_id, config_json=config_json, notes=notes)
        return await project_service.assign_tool(db, project_id, payload)

    row = run(work)
    success(f"Assigned tool {tool} ({row.id})")


@project_app.command("delete")
def project_delete(project_id: str = typer.Argument(..., help="ID")) -> None:
    require(run(lambda db: project_service.delete_project(db, project_id)) or None, "Project", project_id)
    success(f"Deleted project {project_id}")


@progress_app.command("log")
def progress_log(
    ref: str = typer.Argument(..., help="Project ID or name"),
    phase: str = typer.Option(..., "--phase", "-p", help="discovery | design | build | test | deploy | handoff"),
    status: str = typer.Option("in_progress", "--status", help="in_progress | completed | blocked"),
    note: Optional[str] = typer.Option(None, "--note"),
    logged_by: Optional[str] = typer.Option(None, "--by"),
) -> None:
    body = build(ProgressLogBody, phase=phase, status=status, note=note, logged_by=logged_by)

    async def work(db: AsyncSession):
        payload = ProgressLogCreate(project_id=await _project_id(db, ref), **body.model_dump())
        return await progress_service.log_progress(db, payload)

    entry = run(work)
    success(f"Logged {entry.phase} ({entry.status})")


@progress_app.command("timeline")
def progress_timeline(ref: str = typer.Argument(..., help="Project ID or name")) -> None:
    """Entries newest first."""

    async def work(db: AsyncSession):
        return await progress_service.get_timeline(db, await _project_id(db, ref))

    entries = run(work)
    print_table(
        "Timeline",
        ["When", "Phase", "Status", "Note", "By"],
        [(e.logged_at.strftime("%Y-%m-%d %H:%M"), e.phase, e.status, e.note, e.logged_by) for e in entries],
    )


@impl_app.command("add")
def impl_add(
    ref: str = typer.Argument(..., help="Project ID or name"),
    type: str = typer.Option(..., "--type", "-t", help="prompt | config | api_ref | note"),
    title: str = typer.Option(..., "--title"),
    content: str = typer.Option(..., "--content"),
    metadata: Optional[str] = typer.Option(None, "--metadata", help="JSON object"),
    sort_order: int = typer.Option(0, "--sort-order"),
) -> None:
    metadata_json = _parse_json(metadata, "--metadata")

    async def work(db: AsyncSession):
        payload = build(
            ImplementationDetailCreate,
            project_id=await _project_id(db, ref),
            type=type,
            title=title,
            content=content,
            metadata_json=metadata_json,
            sort_order=sort_order,
        )
        return await implementation_service.create_detail(db, payload)

    detail = run(work)
    success(f"Added {detail.type} {detail.title} ({detail.id})")


@impl_app.command("list")
def impl_list(
    ref: str = typer.Argument(..., help="Project ID or name"),
    type: Optional[str] = typer.Option(None, "--type", "-t"),
) -> None:
    async def work(db: AsyncSession):
        return await implementation_service.list_details(db, await _project_id(db, ref), type=type)

    details = run(work)
    print_table(
        "Implementation details",
        ["ID", "Order", "Type", "Title"],
        [(d.id, d.sort_order, d.type, d.title) for d in details],
    )


@impl_app.command("show")
def impl_show(detail_id: str = typer.Argument(..., help="ID")) -> None:
    detail = require(run(lambda db: implementation_service.get_detail(db, detail_id)), "Implementation detail", detail_id)
    print_fields(
        detail.title,
        [
            ("ID", detail.id),
            ("Type", detail.type),
            ("Order", detail.sort_order),
            ("Metadata", json.dumps(detail.metadata_json) if detail.metadata_json is not None else None),
        ],
    )
    console.print(detail.content, markup=False)


@impl_app.command("edit")
def impl_edit(
    detail_id: str = typer.Argument(..., help="ID"),
    type: Optional[str] = typer.Option(None, "--type", "-t"),
    title: Optional[str] = typer.Option(None, "--title"),
    content: Optional[str] = typer.Option(None, "--content"),
    metadata: Optional[str] = typer.Option(None, "--metadata", help="JSON object"),
    sort_order: Optional[int] = typer.Option(None, "--sort-order"),
) -> None:
    given = {
        "type": type,
        "title": title,
        "content": content,
        "metadata_json": _parse_json(metadata, "--metadata"),
        "sort_order": sort_order,
    }
    payload = build(ImplementationDetailUpdate, **{k: v for k, v in given.items() if v is not None})
    detail = require(
        run(lambda db: implementation_service.update_detail(db, detail_id, payload)),
        "Implementation detail",
        detail_id,
    )
    success(f"Updated {detail.title} ({detail.id})")


@impl_app.command("delete")
def impl_delete(detail_id: str = typer.Argument(..., help="ID")) -> None:
    existed = run(lambda db: implementation_service.delete_detail(db, detail_id))
    require(existed or None, "Implementation detail", detail_id)
    success(f"Deleted implementation detail {detail_id}")
