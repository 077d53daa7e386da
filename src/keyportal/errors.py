"""Store-agnostic error kinds.

Learn: Handlers never look at driver error codes (MySQL's ER_DUP_ENTRY,
Postgres SQLSTATE 23505, ...). The persistence layer translates those
into one of a few kinds and routes map kinds onto HTTP status codes.
"""

import enum


class ErrorKind(str, enum.Enum):
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class StoreError(Exception):
    """A persistence failure, classified by kind."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str = "", kind: ErrorKind | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class ConflictError(StoreError):
    """A unique constraint rejected the write."""

    kind = ErrorKind.CONFLICT


class NotFoundError(StoreError):
    kind = ErrorKind.NOT_FOUND
