"""
SoulFinder Backend: Profile (Biodata) Schemas
===============================================

What:  Contracts for profile listing, upsert-by-owner and single reads.
How:   Profile documents are free-form; only the fields the server filters
       or keys on are declared and validated. Everything else the client
       submits is stored as sent.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from soulfinder.schemas.common import check_bson_integers


class ProfileSubmission(BaseModel):
    """
    Body of PATCH /edit-bio-data.

    `biodataId` is accepted so old clients can send the whole document
    back, but it is never written: the domain identifier is server-owned.
    """

    model_config = ConfigDict(extra="allow")

    email: Optional[EmailStr] = Field(default=None, description="Owner email; defaults to the caller")
    biodataId: Optional[Any] = Field(default=None, description="Ignored; assigned by the server")
    biodataType: Optional[str] = Field(default=None, description="Listing category, e.g. Male/Female")
    permanentDivision: Optional[str] = Field(default=None, description="Region")
    age: Optional[int] = Field(default=None, ge=0, le=150)
    category: Optional[str] = Field(default=None, description="Membership tier; 'normal' when created")

    @model_validator(mode="after")
    def extra_fields_fit_the_store(self) -> "ProfileSubmission":
        check_bson_integers(self.model_extra or {})
        return self

    def to_document(self) -> Dict[str, Any]:
        """Submitted fields as a store document, minus server-owned keys."""
        doc = self.model_dump(exclude_unset=True)
        doc.pop("biodataId", None)
        doc.pop("_id", None)
        return doc


class ProfileUpsertResponse(BaseModel):
    """Result of PATCH /edit-bio-data."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    biodata_id: int = Field(alias="biodataId")
    created: bool = Field(description="True when a new profile was inserted")


class ProfilePage(BaseModel):
    """One page of GET /all-bio."""

    model_config = ConfigDict(populate_by_name=True)

    data: List[Dict[str, Any]] = Field(description="Profiles on this page")
    total_count: int = Field(alias="totalCount", description="Profiles matching the filter")
    total_pages: int = Field(alias="totalPages", description="ceil(totalCount / limit)")
    current_page: int = Field(alias="currentPage", description="Echo of the requested page")
