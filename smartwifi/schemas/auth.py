"""
SmartWiFi Portal - Auth schemas
"""
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from smartwifi.models.user import Role


class LoginRequest(BaseModel):
    """Login payload; accepts both ``user``/``pass`` and ``username``/``password``."""
    username: str = Field(
        ..., min_length=1, max_length=50,
        validation_alias=AliasChoices("user", "username"),
    )
    password: str = Field(
        ..., min_length=1,
        validation_alias=AliasChoices("pass", "password"),
    )


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    expires_in: int = Field(..., alias="expiresIn", description="seconds")


class SessionClaims(BaseModel):
    """Authenticated identity carried by a session token."""
    subject_id: str
    username: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class MeResponse(BaseModel):
    user: str
    role: Role
