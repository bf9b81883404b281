"""
Domain errors raised by the service layer.

Input validation errors are pydantic's ``ValidationError`` (raised when the input
models are built, before any write). Missing rows are ``None`` results, not errors.
"""
import re
from typing import Optional

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION_SQLSTATE = "23505"
NOT_NULL_VIOLATION_SQLSTATE = "23502"

# SQLite: "NOT NULL constraint failed: companies.name"; PostgreSQL: null value in column "name" ...
_NOT_NULL_COLUMN = re.compile(r"not null constraint failed: \w+\.(\w+)|null value in column \"(\w+)\"")


class CatalogError(Exception):
    """Base class; ``message`` is safe to show to an end user."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UniqueConstraintViolation(CatalogError):
    """A row with the same unique name already exists (deleted rows included)."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        article = "An" if resource[:1].lower() in "aeiou" else "A"
        super().__init__(f"{article} {resource} with that name already exists")


class ReferentialIntegrityError(CatalogError):
    """A row references a parent that does not exist, or a delete would orphan children."""


class RequiredValueMissing(CatalogError):
    """A NOT NULL column reached the store empty (input models normally stop this first)."""

    def __init__(self, resource: str, field: Optional[str] = None) -> None:
        self.resource = resource
        self.field = field
        what = f"a value for {field}" if field else "a required value"
        super().__init__(f"The {resource} cannot be saved without {what}")


def _not_null_column(text: str) -> Optional[str]:
    match = _NOT_NULL_COLUMN.search(text)
    if match is None:
        return None
    return match.group(1) or match.group(2)


def translate_integrity_error(exc: IntegrityError, resource: str) -> CatalogError:
    """
    Map a store IntegrityError to a domain error without leaking driver text.
    asyncpg exposes SQLSTATE on ``orig.sqlstate``; SQLite only has the message.
    """
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    text = str(orig or exc).lower()
    if sqlstate == UNIQUE_VIOLATION_SQLSTATE or "unique" in text or "duplicate key" in text:
        return UniqueConstraintViolation(resource)
    if sqlstate == NOT_NULL_VIOLATION_SQLSTATE or "not null" in text or "not-null" in text:
        return RequiredValueMissing(resource, _not_null_column(text))
    return ReferentialIntegrityError(f"The {resource} references a record that does not exist")
