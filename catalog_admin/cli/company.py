"""company and tool command groups."""
from typing import List, Optional

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
from catalog_admin.models import Company, Industry, Niche, Product, Service
from catalog_admin.schemas.company import CompanyCreate, CompanyUpdate
from catalog_admin.schemas.tool import ToolCreate
from catalog_admin.services import company_service, tool_service

company_app = typer.Typer(help="Manage client companies and their catalog links.", no_args_is_help=True)
tool_app = typer.Typer(help="Manage the tool registry.", no_args_is_help=True)

_TARGETS = {
    "industry": (Industry, "Industry"),
    "niche": (Niche, "Niche"),
    "product": (Product, "Product"),
    "service": (Service, "Service"),
}


@company_app.command("add")
def company_add(
    name: str = typer.Option(..., "--name", "-n"),
    contact_name: Optional[str] = typer.Option(None, "--contact-name"),
    contact_email: Optional[str] = typer.Option(None, "--contact-email"),
    contact_phone: Optional[str] = typer.Option(None, "--contact-phone"),
    website: Optional[str] = typer.Option(None, "--website"),
    notes: Optional[str] = typer.Option(None, "--notes"),
) -> None:
    payload = build(
        CompanyCreate,
        name=name,
        contact_name=contact_name,
        contact_email=contact_email,
        contact_phone=contact_phone,
        website=website,
        notes=notes,
    )
    company = run(lambda db: company_service.create_company(db, payload))
    success(f"Created company {company.name} ({company.id})")


@company_app.command("list")
def company_list(
    status: Optional[str] = typer.Option(None, "--status"),
    search: Optional[str] = typer.Option(None, "--search", "-s"),
) -> None:
    companies = run(lambda db: company_service.list_companies(db, status=status, search=search))
    print_table(
        "Companies",
        ["ID", "Name", "Status", "Contact"],
        [(c.id, c.name, c.status, c.contact_name) for c in companies],
    )


@company_app.command("show")
def company_show(
    ref: str = typer.Argument(..., help="ID or name"),
    projects: bool = typer.Option(False, "--projects", help="Also list the company's projects"),
) -> None:
    company = require(
        run(lambda db: company_service.get_company(db, ref, include_projects=projects)),
        "Company",
        ref,
    )
    print_fields(
        company.name,
        [
            ("ID", company.id),
            ("Status", company.status),
            ("Contact", company.contact_name),
            ("Email", company.contact_email),
            ("Phone", company.contact_phone),
            ("Website", company.website),
            ("Notes", company.notes),
        ],
    )
    for label, items in (
        ("Industries", company.industries),
        ("Niches", company.niches),
        ("Products", company.products),
        ("Services", company.services),
    ):
        print_table(label, ["ID", "Name", "Notes"], [(i.id, i.name, i.notes) for i in items])
    if company.projects is not None:
        print_table(
            "Projects",
            ["ID", "Name", "Status", "Target"],
            [(p.id, p.name, p.status, p.target_date) for p in company.projects],
        )


@company_app.command("edit")
def company_edit(
    ref: str = typer.Argument(..., help="ID or name"),
    name: Optional[str] = typer.Option(None, "--name", "-n"),
    status: Optional[str] = typer.Option(None, "--status"),
    contact_name: Optional[str] = typer.Option(None, "--contact-name"),
    contact_email: Optional[str] = typer.Option(None, "--contact-email"),
    contact_phone: Optional[str] = typer.Option(None, "--contact-phone"),
    website: Optional[str] = typer.Option(None, "--website"),
    notes: Optional[str] = typer.Option(None, "--notes"),
) -> None:
    """Only the options given are written; pass "" to clear a contact field."""
    given = {
        "name": name,
        "status": status,
        "contact_name": contact_name,
        "contact_email": contact_email,
        "contact_phone": contact_phone,
        "website": website,
        "notes": notes,
    }
    payload = build(CompanyUpdate, **{k: v for k, v in given.items() if v is not None})

    async def work(db: AsyncSession):
        company_id = await resolve_id(db, Company, ref, "Company")
        return await company_service.update_company(db, company_id, payload)

    company = run(work)
    success(f"Updated company {company.name} ({company.id})")


@company_app.command("delete")
def company_delete(company_id: str = typer.Argument(..., help="ID")) -> None:
    require(run(lambda db: company_service.delete_company(db, company_id)) or None, "Company", company_id)
    success(f"Deleted company {company_id}")


def _assign(kind: str, company: str, ref: str, notes: Optional[str]) -> None:
    model, label = _TARGETS[kind]

    async def work(db: AsyncSession):
        company_id = await resolve_id(db, Company, company, "Company")
        ref_id = await resolve_id(db, model, ref, label)
        return await company_service.assign(db, company_id, kind, ref_id, notes)

    row = run(work)
    success(f"Assigned {kind} {ref} to {company} ({row.id})")


@company_app.command("assign-industry")
def assign_industry(
    company: str = typer.Argument(..., help="Company ID or name"),
    industry: str = typer.Argument(..., help="Industry ID or name"),
) -> None:
    _assign("industry", company, industry, None)


@company_app.command("assign-niche")
def assign_niche(
    company: str = typer.Argument(..., help="Company ID or name"),
    niche: str = typer.Argument(..., help="Niche ID or name"),
) -> None:
    _assign("niche", company, niche, None)


@company_app.command("assign-product")
def assign_product(
    company: str = typer.Argument(..., help="Company ID or name"),
    product: str = typer.Argument(..., help="Product ID or name"),
    notes: Optional[str] = typer.Option(None, "--notes"),
) -> None:
    _assign("product", company, product, notes)


@company_app.command("assign-service")
def assign_service(
    company: str = typer.Argument(..., help="Company ID or name"),
    service: str = typer.Argument(..., help="Service ID or name"),
    notes: Optional[str] = typer.Option(None, "--notes"),
) -> None:
    _assign("service", company, service, notes)


@company_app.command("set-assignments")
def set_assignments(
    company: str = typer.Argument(..., help="Company ID or name"),
    kind: str = typer.Argument(..., help="industry | niche | product | service"),
    refs: Optional[List[str]] = typer.Argument(None, help="IDs or names; none clears the set"),
) -> None:
    """Replace every link of one kind with exactly the given items."""
    if kind not in _TARGETS:
        console.print(f"[red]Error:[/] unknown kind {kind}; expected one of {', '.join(_TARGETS)}")
        raise typer.Exit(code=1)
    model, label = _TARGETS[kind]

    async def work(db: AsyncSession):
        company_id = await resolve_id(db, Company, company, "Company")
        ids = [await resolve_id(db, model, ref, label) for ref in refs or []]
        return await company_service.replace_assignments(db, company_id, kind, ids)

    rows = run(work)
    success(f"{company} now has {len(rows)} {kind} link(s)")


@tool_app.command("add")
def tool_add(
    name: str = typer.Option(..., "--name", "-n"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    url: Optional[str] = typer.Option(None, "--url"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
) -> None:
    payload = build(ToolCreate, name=name, category=category, url=url, description=description)
    tool = run(lambda db: tool_service.create_tool(db, payload))
    success(f"Created tool {tool.name} ({tool.id})")


@tool_app.command("list")
def tool_list(
    search: Optional[str] = typer.Option(None, "--search", "-s"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
) -> None:
    tools = run(lambda db: tool_service.list_tools(db, search=search, category=category))
    print_table("Tools", ["ID", "Name", "Category", "URL"], [(t.id, t.name, t.category, t.url) for t in tools])


@tool_app.command("show")
def tool_show(ref: str = typer.Argument(..., help="ID or name")) -> None:
    tool = require(run(lambda db: tool_service.get_tool(db, ref)), "Tool", ref)
    print_fields(
        tool.name,
        [("ID", tool.id), ("Category", tool.category), ("URL", tool.url), ("Description", tool.description)],
    )


@tool_app.command("delete")
def tool_delete(tool_id: str = typer.Argument(..., help="ID")) -> None:
    require(run(lambda db: tool_service.delete_tool(db, tool_id)) or None, "Tool", tool_id)
    success(f"Deleted tool {tool_id}")
