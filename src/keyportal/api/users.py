"""User API: self-service registration.

- POST /user/register → create a user and issue an API key (shown ONCE)
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from keyportal.auth.dependencies import get_settings
from keyportal.auth.keys import format_timestamp
from keyportal.config import Settings
from keyportal.db.engine import get_db
from keyportal.errors import ConflictError, StoreError
from keyportal.schemas.user import UserRegister, UserRegistered
from keyportal.services.user_service import UserService

logger = structlog.get_logger()

router = APIRouter(prefix="/user")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("/register", response_model=UserRegistered, status_code=201)
async def register_user(
    body: UserRegister,
    svc: UserService = Depends(_svc),
    settings: Settings = Depends(get_settings),
):
    """Register a user and return their new API key."""
    try:
        registration = await svc.register(
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            expire_days=settings.api_key_expire_days,
        )
    except ConflictError:
        logger.info("user.register_conflict")
        raise HTTPException(status_code=409, detail="User email already registered")
    except StoreError:
        logger.exception("user.register_failed")
        raise HTTPException(status_code=500, detail="Failed to register user")

    return UserRegistered(
        message="Registration successful. API key created.",
        api_key=registration.api_key.api_key,
        expires_at=format_timestamp(registration.api_key.expires_at),
    )
