"""
SoulFinder Backend: Premium Request Schemas
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from soulfinder.schemas.common import BSON_INT64_MAX


class PremiumRequestSubmission(BaseModel):
    """Optional body of POST /premium-request/{email}."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    biodataId: Optional[int] = Field(default=None, le=BSON_INT64_MAX)
