"""
SoulFinder Backend: Success Story Schemas
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from soulfinder.schemas.common import BSON_INT64_MAX


class SuccessStorySubmission(BaseModel):
    model_config = ConfigDict(extra="ignore")

    selfBiodataId: int = Field(le=BSON_INT64_MAX)
    partnerBiodataId: int = Field(le=BSON_INT64_MAX)
    coupleImage: Optional[str] = Field(default=None, description="Image URL")
    review: str = Field(min_length=1, max_length=5000)
    marriageDate: date
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class SuccessStoryCreated(BaseModel):
    message: str
    id: str
