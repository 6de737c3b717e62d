"""
SoulFinder Backend: Favorite Schemas
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, model_validator

from soulfinder.schemas.common import BSON_INT64_MAX, check_bson_integers


class FavoriteSubmission(BaseModel):
    """
    Body of POST /favorite-bios/{email}.

    Carries the favorited profile's display fields; they are stored as a
    snapshot when the favorite record is first created.
    """

    model_config = ConfigDict(extra="allow")

    biodataId: int = Field(le=BSON_INT64_MAX, description="Domain identifier of the favorited profile")

    @model_validator(mode="after")
    def snapshot_fits_the_store(self) -> "FavoriteSubmission":
        check_bson_integers(self.model_extra or {})
        return self

    def snapshot(self) -> Dict[str, Any]:
        doc = self.model_dump()
        for key in ("biodataId", "setBy", "_id"):
            doc.pop(key, None)
        return doc


class FavoriteAddResponse(BaseModel):
    message: str
    created: bool = Field(description="True when this was the profile's first favorite")
