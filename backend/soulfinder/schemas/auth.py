"""
SoulFinder Backend: Authenticated Identity
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """Decoded bearer-token identity attached to a request by the authentication gate."""

    uid: str = Field(default="", description="Provider user id")
    email: str = Field(description="Verified email claim, lowercased")
    claims: Dict[str, Any] = Field(default_factory=dict, description="All decoded claims")
