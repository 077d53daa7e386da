"""Admin service: registration, credential checks, dashboard reads.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the database. Store failures
leave this module as StoreError/ConflictError, never as driver errors.
"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from keyportal.auth.password import hash_password, verify_password
from keyportal.db.errors import translate
from keyportal.db.models import Admin, ApiKey, User


class AdminService:
    """Business logic for administrators."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, email: str, password: str) -> Admin:
        """Insert a new admin. Raises ConflictError if the email is taken."""
        admin = Admin(email=email, password_hash=hash_password(password))
        self.db.add(admin)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise translate(e) from e
        return admin

    async def authenticate(self, email: str, password: str) -> Admin | None:
        """Return the admin if email and password match, else None.

        Unknown email and wrong password both return None so callers
        cannot tell them apart.
        """
        try:
            result = await self.db.execute(select(Admin).where(Admin.email == email))
        except SQLAlchemyError as e:
            raise translate(e) from e
        admin = result.scalars().first()
        if admin is None:
            return None
        if not verify_password(password, admin.password_hash):
            return None
        return admin

    async def list_users(self) -> list[User]:
        try:
            result = await self.db.execute(
                select(User).order_by(User.created_at.desc(), User.id.desc())
            )
        except SQLAlchemyError as e:
            raise translate(e) from e
        return list(result.scalars().all())

    async def list_api_keys(self) -> list[ApiKey]:
        try:
            result = await self.db.execute(
                select(ApiKey).order_by(ApiKey.created_at.desc(), ApiKey.id.desc())
            )
        except SQLAlchemyError as e:
            raise translate(e) from e
        return list(result.scalars().all())
