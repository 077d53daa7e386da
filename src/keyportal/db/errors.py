"""Translate SQLAlchemy/driver exceptions into store error kinds."""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from keyportal.errors import ConflictError, ErrorKind, StoreError

# SQLSTATE for unique_violation (PostgreSQL / asyncpg)
_PG_UNIQUE_VIOLATION = "23505"
# MySQL ER_DUP_ENTRY
_MYSQL_DUP_ENTRY = 1062

_UNIQUE_MARKERS = (
    "unique constraint failed",  # SQLite
    "duplicate entry",  # MySQL
    "duplicate key value",  # PostgreSQL
    "uniqueviolationerror",  # asyncpg class name in wrapped messages
)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when an IntegrityError was caused by a unique constraint."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == _PG_UNIQUE_VIOLATION:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    text = f"{type(orig).__name__} {orig}".lower()
    return any(marker in text for marker in _UNIQUE_MARKERS)


def translate(exc: Exception) -> StoreError:
    """Map an exception raised by the store onto a StoreError."""
    if isinstance(exc, StoreError):
        return exc
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        return ConflictError(str(exc.orig))
    if isinstance(exc, SQLAlchemyError):
        return StoreError(str(exc), kind=ErrorKind.INTERNAL)
    return StoreError(repr(exc), kind=ErrorKind.INTERNAL)
