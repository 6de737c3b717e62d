"""
SoulFinder Backend: Account Schemas
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

Role = Literal["normal", "premium", "admin"]


class AccountLogin(BaseModel):
    """Body of POST /add-users, sent by the frontend after every sign-in."""

    model_config = ConfigDict(extra="ignore")

    email: EmailStr
    name: Optional[str] = None
    photo: Optional[str] = Field(default=None, description="Avatar URL")


class AccountLoginResponse(BaseModel):
    message: str
    created: bool


class RoleUpdate(BaseModel):
    """Body of PATCH /update-role/{email}."""
    role: Role


class RoleResponse(BaseModel):
    email: str
    role: Optional[str] = None
