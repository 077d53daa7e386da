"""Pydantic schemas for end-user registration."""

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=255)


class UserRegistered(BaseModel):
    """Response for registration: the key is only shown ONCE."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    api_key: str = Field(alias="apiKey")
    expires_at: str = Field(alias="expiresAt")
