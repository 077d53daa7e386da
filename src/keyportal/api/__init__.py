"""API route aggregation.

All routers registered here get mounted in main.py under the configured
prefix (default /api). Only the dashboard needs the admin token; it
declares that dependency on its own route.
"""

from fastapi import APIRouter

from keyportal.api.admin import router as admin_router
from keyportal.api.health import router as health_router
from keyportal.api.users import router as users_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(admin_router, tags=["admin"])
api_router.include_router(users_router, tags=["users"])
