"""Admin API: registration, login, dashboard.

Learn: Routes for the admin side:
- POST /admin/register → create an admin (email + password)
- POST /admin/login → email/password → the shared admin bearer token
- GET /admin/dashboard → every user and key (bearer token required)

Routes handle HTTP concerns (status codes, error responses); the
service layer handles the database.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from keyportal.auth.dependencies import get_settings, require_admin
from keyportal.config import Settings
from keyportal.db.engine import get_db
from keyportal.errors import ConflictError, StoreError
from keyportal.schemas.admin import (
    AdminCredentials,
    DashboardRead,
    LoginResponse,
    MessageResponse,
)
from keyportal.services.admin_service import AdminService

logger = structlog.get_logger()

router = APIRouter(prefix="/admin")

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


def _svc(db: AsyncSession = Depends(get_db)) -> AdminService:
    return AdminService(db)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register_admin(body: AdminCredentials, svc: AdminService = Depends(_svc)):
    """Create a new admin account."""
    try:
        await svc.register(email=body.email, password=body.password)
    except ConflictError:
        logger.info("admin.register_conflict")
        raise HTTPException(status_code=409, detail="Admin email already registered")
    except StoreError:
        logger.exception("admin.register_failed")
        raise HTTPException(status_code=500, detail="Failed to register admin")

    logger.info("admin.registered")
    return {"message": "Admin registered"}


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=LoginResponse)
async def login_admin(
    body: AdminCredentials,
    svc: AdminService = Depends(_svc),
    settings: Settings = Depends(get_settings),
):
    """Login with email and password → admin bearer token."""
    try:
        admin = await svc.authenticate(email=body.email, password=body.password)
    except StoreError:
        logger.exception("admin.login_failed")
        raise HTTPException(status_code=500, detail="Login failed")

    if admin is None:
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

    if not settings.admin_token:
        logger.error("admin.token_not_configured", admin_id=admin.id)
        raise HTTPException(status_code=500, detail="Admin token is not configured")

    return LoginResponse(message="Login successful", token=settings.admin_token)


# ─── Dashboard ───────────────────────────────────────────


@router.get(
    "/dashboard",
    response_model=DashboardRead,
    dependencies=[Depends(require_admin)],
)
async def dashboard(svc: AdminService = Depends(_svc)):
    """All users and all API keys, newest first. No pagination."""
    try:
        users = await svc.list_users()
        keys = await svc.list_api_keys()
    except StoreError:
        logger.exception("admin.dashboard_failed")
        raise HTTPException(status_code=500, detail="Failed to load dashboard")

    return DashboardRead.model_validate({"users": users, "keys": keys}, from_attributes=True)
