"""FastAPI auth dependencies.

Learn: require_admin is used as Depends() on admin-only routes. It does
not touch the database: the bearer token is compared with the single
admin token from configuration.

- no Authorization header, or not "Bearer <token>" → 401
- well-formed but wrong token → 403
"""

import secrets
from typing import Optional

import structlog
from fastapi import Header, HTTPException, Request

from keyportal.config import Settings

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "


def get_settings(request: Request) -> Settings:
    """FastAPI dependency: the Settings the app was built with."""
    return request.app.state.settings


def token_matches(token: str, expected: str) -> bool:
    """An empty configured token never matches anything."""
    if not expected:
        return False
    return secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> None:
    """Reject the request unless it carries the admin bearer token."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[len(BEARER_PREFIX):]
    if not token_matches(token, get_settings(request).admin_token):
        logger.info("admin.token_rejected", path=request.url.path)
        raise HTTPException(status_code=403, detail="Invalid admin token")
