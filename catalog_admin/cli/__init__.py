"""Typer CLI: ``catalog-admin <group> <command>``."""
import asyncio

import typer

from catalog_admin.cli._runtime import success
from catalog_admin.cli.blueprint import blueprint_app
from catalog_admin.cli.catalog import industry_app, niche_app, product_app, service_app
from catalog_admin.cli.company import company_app, tool_app
from catalog_admin.cli.project import impl_app, progress_app, project_app
from catalog_admin.config import get_settings
from catalog_admin.db import Store
from catalog_admin.logging_config import configure_logging

app = typer.Typer(
    name="catalog-admin",
    help="Business catalog and client project administration.",
    no_args_is_help=True,
)

app.add_typer(industry_app, name="industry")
app.add_typer(niche_app, name="niche")
app.add_typer(product_app, name="product")
app.add_typer(service_app, name="service")
app.add_typer(company_app, name="company")
app.add_typer(tool_app, name="tool")
app.add_typer(project_app, name="project")
app.add_typer(progress_app, name="progress")
app.add_typer(impl_app, name="impl")
app.add_typer(blueprint_app, name="blueprint")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show info-level logs")) -> None:
    configure_logging("INFO" if verbose else "WARNING")


@app.command("init-db")
def init_db() -> None:
    """Create all tables directly from the models (development databases; use alembic elsewhere)."""

    async def _create() -> None:
        store = Store.from_settings(get_settings(), pool_size=1)
        try:
            await store.create_all()
        finally:
            await store.dispose()

    asyncio.run(_create())
    success("Database schema is ready")
