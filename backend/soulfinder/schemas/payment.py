"""
SoulFinder Backend: Payment Schemas
"""

from pydantic import BaseModel, ConfigDict, Field


class PaymentIntentRequest(BaseModel):
    price: float = Field(gt=0, description="Price in major currency units, e.g. 5.0")


class PaymentIntentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(alias="clientSecret")
