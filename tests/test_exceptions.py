"""Store integrity failures map to domain errors without leaking driver text."""
from sqlalchemy.exc import IntegrityError

from catalog_admin.exceptions import (
    ReferentialIntegrityError,
    RequiredValueMissing,
    UniqueConstraintViolation,
    translate_integrity_error,
)


class _PgError(Exception):
    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO companies ...", {}, orig)


def test_unique_violation() -> None:
    err = translate_integrity_error(_integrity(Exception("UNIQUE constraint failed: industries.name")), "industry")
    assert isinstance(err, UniqueConstraintViolation)
    assert err.message == "An industry with that name already exists"


def test_not_null_is_not_reported_as_referential() -> None:
    err = translate_integrity_error(_integrity(Exception("NOT NULL constraint failed: companies.name")), "company")
    assert isinstance(err, RequiredValueMissing)
    assert err.field == "name"
    assert err.message == "The company cannot be saved without a value for name"

    pg = _PgError('null value in column "status" of relation "companies" violates not-null constraint', "23502")
    err = translate_integrity_error(_integrity(pg), "company")
    assert isinstance(err, RequiredValueMissing)
    assert err.field == "status"


def test_foreign_key_failure_is_referential() -> None:
    err = translate_integrity_error(_integrity(Exception("FOREIGN KEY constraint failed")), "project")
    assert isinstance(err, ReferentialIntegrityError)
    assert "sqlite" not in err.message.lower()
    assert err.message == "The project references a record that does not exist"
