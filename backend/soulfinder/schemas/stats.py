"""
SoulFinder Backend: Admin Statistics Schema
"""

from pydantic import BaseModel, ConfigDict, Field


class PlatformStats(BaseModel):
    """Body of GET /all-info."""

    model_config = ConfigDict(populate_by_name=True)

    total_biodata: int = Field(alias="totalBiodata", description="Approximate profile count")
    male_biodata: int = Field(alias="maleBiodata")
    female_biodata: int = Field(alias="femaleBiodata")
    premium_biodata: int = Field(alias="premiumBiodata", description="Profiles in the premium category")
    premium_users: int = Field(alias="premiumUsers", description="Accounts with the premium role")
    total_revenue: float = Field(alias="totalRevenue", description="Sum of contact-request fees")
