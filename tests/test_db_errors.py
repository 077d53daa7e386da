"""Driver error translation into store error kinds."""

from sqlalchemy.exc import IntegrityError, OperationalError

from keyportal.db.errors import is_unique_violation, translate
from keyportal.errors import ConflictError, ErrorKind, NotFoundError, StoreError


class _PgError(Exception):
    def __init__(self, sqlstate: str, message: str = ""):
        super().__init__(message)
        self.sqlstate = sqlstate


class _MySQLError(Exception):
    pass


def _integrity(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


def test_postgres_unique_violation():
    exc = _integrity(_PgError("23505", "duplicate key value violates unique constraint"))
    assert is_unique_violation(exc)
    assert isinstance(translate(exc), ConflictError)


def test_postgres_foreign_key_violation_is_internal():
    exc = _integrity(_PgError("23503", "violates foreign key constraint"))
    assert not is_unique_violation(exc)
    error = translate(exc)
    assert not isinstance(error, ConflictError)
    assert error.kind is ErrorKind.INTERNAL


def test_mysql_duplicate_entry():
    exc = _integrity(_MySQLError(1062, "Duplicate entry 'a@b' for key 'email'"))
    assert isinstance(translate(exc), ConflictError)


def test_sqlite_unique_constraint():
    exc = _integrity(Exception("UNIQUE constraint failed: users.email"))
    assert translate(exc).kind is ErrorKind.CONFLICT


def test_operational_error_is_internal():
    exc = OperationalError("SELECT 1", {}, Exception("connection refused"))
    error = translate(exc)
    assert type(error) is StoreError
    assert error.kind is ErrorKind.INTERNAL


def test_unknown_exception_is_internal():
    assert translate(RuntimeError("boom")).kind is ErrorKind.INTERNAL


def test_store_errors_pass_through():
    original = NotFoundError("missing")
    assert translate(original) is original
    assert original.kind is ErrorKind.NOT_FOUND
