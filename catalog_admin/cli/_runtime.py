"""Shared CLI plumbing: one single-connection store per invocation, error mapping, Rich output."""
import asyncio
from typing import Any, Awaitable, Callable, Iterable, NoReturn, Optional, Sequence, Tuple, Type, TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.config import get_settings
from catalog_admin.db import Store
from catalog_admin.exceptions import CatalogError
from catalog_admin.services.common import find_by_id_or_name

console = Console()

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


def fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/] {escape(message)}")
    raise typer.Exit(code=1)


def validation_message(exc: ValidationError) -> str:
    """One line per invalid field: "field: reason"."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "input"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def build(model: Type[M], **data: Any) -> M:
    """Validate command input before anything touches the store."""
    try:
        return model(**data)
    except ValidationError as exc:
        fail(validation_message(exc))


def require(item: Optional[T], what: str, ref: str) -> T:
    if item is None:
        fail(f"{what} not found: {ref}")
    return item


def run(work: Callable[[AsyncSession], Awaitable[T]]) -> T:
    """
    Run one unit of work and commit it. Domain and validation errors print a red line
    and exit 1 (the transaction is rolled back); anything else propagates.
    """

    async def _main() -> T:
        store = Store.from_settings(get_settings(), pool_size=1)
        try:
            async with store.unit_of_work() as db:
                return await work(db)
        finally:
            await store.dispose()

    try:
        return asyncio.run(_main())
    except CatalogError as exc:
        fail(exc.message)
    except ValidationError as exc:
        fail(validation_message(exc))


async def resolve_id(db: AsyncSession, model: Type[Any], ref: str, what: str) -> str:
    """Id of the live row whose id or name is ref; exits 1 when there is none."""
    row = await find_by_id_or_name(db, model, ref)
    return require(row, what, ref)[0].id


def _cell(value: Any) -> str:
    return "-" if value is None else escape(str(value))


def print_table(title: str, columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    rows = list(rows)
    if not rows:
        console.print(f"[dim]No {title.lower()} found.[/]")
        return
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(_cell(v) for v in row))
    console.print(table)


def print_fields(title: str, fields: Iterable[Tuple[str, Any]]) -> None:
    """Labelled lines under a bold heading."""
    console.print(f"[bold]{escape(title)}[/]")
    for label, value in fields:
        console.print(f"  {label + ':':<14} {_cell(value)}")


def success(message: str) -> None:
    console.print(f"[green]{escape(message)}[/]")
