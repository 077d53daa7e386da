"""SQLAlchemy ORM models: single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Three tables:
- admins: dashboard operators (email + password hash)
- users: self-registered API consumers
- api_keys: keys issued to users, created together with the user row

Timestamps are naive UTC DATETIME values, second precision.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql.expression import FunctionElement


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class utcnow(FunctionElement):
    """Current UTC time as a naive timestamp, evaluated by the database.

    func.now() on PostgreSQL is the session time zone, which would not
    line up with the naive UTC expires_at values written from Python.
    """

    type = DateTime()
    inherit_cache = True


@compiles(utcnow)
def _utcnow_default(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


@compiles(utcnow, "postgresql")
def _utcnow_postgresql(element, compiler, **kw):
    return "TIMEZONE('utc', CURRENT_TIMESTAMP)"


@compiles(utcnow, "mysql")
def _utcnow_mysql(element, compiler, **kw):
    return "(UTC_TIMESTAMP())"


class Admin(Base):
    """A dashboard administrator."""

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)


class User(Base):
    """An API consumer. Immutable once registered."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=utcnow(), nullable=False
    )


class ApiKey(Base):
    """API key issued to a user.

    Learn: The plaintext key is stored because the dashboard lists it.
    expires_at is informational; nothing in this service rejects an
    expired key.
    """

    __tablename__ = "api_keys"
    __table_args__ = (Index("idx_api_keys_user", "user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    api_key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=utcnow(), nullable=False
    )
