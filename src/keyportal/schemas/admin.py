"""Pydantic schemas for admin registration, login and the dashboard.

Learn: Pydantic v2 models validate request/response data. Separate
request schemas (input) from response schemas (output) for clean APIs.
A missing or empty field fails validation and is answered with 400.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class AdminCredentials(BaseModel):
    """Body of both /admin/register and /admin/login."""
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str


class UserSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str

    model_config = {"from_attributes": True}


class ApiKeySummary(BaseModel):
    id: int
    user_id: int
    api_key: str
    expires_at: datetime

    model_config = {"from_attributes": True}


class DashboardRead(BaseModel):
    """Every user and every key, newest first."""
    users: list[UserSummary]
    keys: list[ApiKeySummary]
