"""
SoulFinder Backend: Contact Request Schemas
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from soulfinder.schemas.common import BSON_INT64_MAX


class ContactRequestSubmission(BaseModel):
    """Body of POST /contact-req, sent after the payment succeeds."""

    model_config = ConfigDict(extra="ignore")

    biodataId: int = Field(le=BSON_INT64_MAX)
    email: EmailStr = Field(description="Requester email")
    name: Optional[str] = None
    transactionId: str = Field(min_length=1)
    fee: float = Field(ge=0, description="Amount paid, in major currency units")


class ContactRequestCreated(BaseModel):
    message: str
    id: str
