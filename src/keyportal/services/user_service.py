"""User service: registration with API key issuance.

Learn: The user row and its first API key are written in one transaction
on one session (one pooled connection). The user insert is flushed first
so the database assigns its id, the key row references that id, and only
then is the whole unit committed. Any failure rolls both back: there is
never a user without a key.
"""

from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from keyportal.auth.keys import DEFAULT_EXPIRE_DAYS, compute_expiration, generate_api_key
from keyportal.db.errors import translate
from keyportal.db.models import ApiKey, User
from keyportal.errors import ErrorKind, StoreError

logger = structlog.get_logger()


@dataclass
class Registration:
    user: User
    api_key: ApiKey


class UserService:
    """Business logic for end users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        expire_days: int = DEFAULT_EXPIRE_DAYS,
    ) -> Registration:
        """Create a user and its API key atomically.

        Raises ConflictError when the email is already registered and
        StoreError for anything else; the transaction is rolled back first.
        """
        stage = "user"
        try:
            user = User(first_name=first_name, last_name=last_name, email=email)
            self.db.add(user)
            await self.db.flush()

            stage = "api_key"
            api_key = ApiKey(
                user_id=user.id,
                api_key=generate_api_key(),
                expires_at=compute_expiration(expire_days),
            )
            self.db.add(api_key)
            await self.db.flush()

            stage = "commit"
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            error = translate(e)
            # Only a duplicate email is a client conflict; a key collision is ours
            if error.kind is ErrorKind.CONFLICT and stage != "user":
                error = StoreError(f"{stage} failed: {error}", kind=ErrorKind.INTERNAL)
            raise error from e

        logger.info("user.registered", user_id=user.id, api_key_id=api_key.id)
        return Registration(user=user, api_key=api_key)
