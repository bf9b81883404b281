"""industry / niche / product / service command groups."""
from typing import Any, Awaitable, Callable, List, Optional

import typer
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.cli._runtime import (
    build,
    print_fields,
    print_table,
    require,
    resolve_id,
    run,
    success,
)
from catalog_admin.models import Industry
from catalog_admin.schemas.catalog import CatalogItemCreate, NicheCreate
from catalog_admin.services import catalog_service


def _flat_group(
    label: str,
    plural: str,
    create: Callable[[AsyncSession, CatalogItemCreate], Awaitable[Any]],
    list_items: Callable[..., Awaitable[List[Any]]],
    get: Callable[[AsyncSession, str], Awaitable[Optional[Any]]],
    delete: Callable[[AsyncSession, str], Awaitable[bool]],
) -> typer.Typer:
    """add/list/show/delete for a catalog kind that is just name + description."""
    group = typer.Typer(help=f"Manage {plural.lower()}.", no_args_is_help=True)

    @group.command("add")
    def add(
        name: str = typer.Option(..., "--name", "-n"),
        description: Optional[str] = typer.Option(None, "--description", "-d"),
    ) -> None:
        payload = build(CatalogItemCreate, name=name, description=description)
        item = run(lambda db: create(db, payload))
        success(f"Created {label.lower()} {item.name} ({item.id})")

    @group.command("list")
    def list_(search: Optional[str] = typer.Option(None, "--search", "-s")) -> None:
        items = run(lambda db: list_items(db, search=search))
        print_table(plural, ["ID", "Name", "Description"], [(i.id, i.name, i.description) for i in items])

    @group.command("show")
    def show(ref: str = typer.Argument(..., help="ID or name")) -> None:
        item = require(run(lambda db: get(db, ref)), label, ref)
        print_fields(
            item.name,
            [("ID", item.id), ("Description", item.description), ("Created", item.created_at)],
        )

    @group.command("delete")
    def delete_(item_id: str = typer.Argument(..., help="ID")) -> None:
        require(run(lambda db: delete(db, item_id)) or None, label, item_id)
        success(f"Deleted {label.lower()} {item_id}")

    return group


industry_app = _flat_group(
    "Industry",
    "Industries",
    catalog_service.create_industry,
    catalog_service.list_industries,
    catalog_service.get_industry,
    catalog_service.delete_industry,
)
product_app = _flat_group(
    "Product",
    "Products",
    catalog_service.create_product,
    catalog_service.list_products,
    catalog_service.get_product,
    catalog_service.delete_product,
)
service_app = _flat_group(
    "Service",
    "Services",
    catalog_service.create_service,
    catalog_service.list_services,
    catalog_service.get_service,
    catalog_service.delete_service,
)

niche_app = typer.Typer(help="Manage niches (each belongs to one industry).", no_args_is_help=True)


@niche_app.command("add")
def niche_add(
    name: str = typer.Option(..., "--name", "-n"),
    industry: str = typer.Option(..., "--industry", "-i", help="Industry ID or name"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
) -> None:
    build(CatalogItemCreate, name=name, description=description)

    async def work(db: AsyncSession):
        industry_id = await resolve_id(db, Industry, industry, "Industry")
        payload = build(NicheCreate, name=name, description=description, industry_id=industry_id)
        return await catalog_service.create_niche(db, payload)

    niche = run(work)
    success(f"Created niche {niche.name} in {niche.industry_name} ({niche.id})")


@niche_app.command("list")
def niche_list(
    search: Optional[str] = typer.Option(None, "--search", "-s"),
    industry: Optional[str] = typer.Option(None, "--industry", "-i", help="Industry ID or name"),
) -> None:
    async def work(db: AsyncSession):
        industry_id = await resolve_id(db, Industry, industry, "Industry") if industry else None
        return await catalog_service.list_niches(db, search=search, industry_id=industry_id)

    niches = run(work)
    print_table(
        "Niches",
        ["ID", "Name", "Industry", "Description"],
        [(n.id, n.name, n.industry_name, n.description) for n in niches],
    )


@niche_app.command("show")
def niche_show(
    ref: str = typer.Argument(..., help="ID or name"),
    industry: Optional[str] = typer.Option(None, "--industry", "-i", help="Industry ID or name (same-named niches)"),
) -> None:
    async def work(db: AsyncSession):
        industry_id = await resolve_id(db, Industry, industry, "Industry") if industry else None
        return await catalog_service.get_niche(db, ref, industry_id=industry_id)

    niche = require(run(work), "Niche", ref)
    print_fields(
        niche.name,
        [
            ("ID", niche.id),
            ("Industry", niche.industry_name),
            ("Description", niche.description),
            ("Created", niche.created_at),
        ],
    )


@niche_app.command("delete")
def niche_delete(niche_id: str = typer.Argument(..., help="ID")) -> None:
    require(run(lambda db: catalog_service.delete_niche(db, niche_id)) or None, "Niche", niche_id)
    success(f"Deleted niche {niche_id}")
