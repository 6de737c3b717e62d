"""
SoulFinder Backend: Admin Statistics Service
===============================================

What:  Read-only aggregate counts for the admin dashboard (GET /all-info).
How:   Independent count queries plus one $group aggregation over
       contact-request fees. The total profile count uses the collection
       metadata estimate.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.database import BIODATA, CONTACT_REQUESTS, USERS
from soulfinder.schemas.stats import PlatformStats

logger = logging.getLogger(__name__)


class StatsService:

    async def total_revenue(self, db: AsyncIOMotorDatabase) -> float:
        """Sum of `fee` across contact requests; 0 when there are none."""
        pipeline = [{"$group": {"_id": None, "total": {"$sum": "$fee"}}}]
        groups = await db[CONTACT_REQUESTS].aggregate(pipeline).to_list(length=1)
        if not groups:
            return 0.0
        return float(groups[0].get("total") or 0)

    async def collect(self, db: AsyncIOMotorDatabase) -> PlatformStats:
        stats = PlatformStats(
            total_biodata=await db[BIODATA].estimated_document_count(),
            male_biodata=await db[BIODATA].count_documents({"biodataType": "Male"}),
            female_biodata=await db[BIODATA].count_documents({"biodataType": "Female"}),
            premium_biodata=await db[BIODATA].count_documents({"category": "premium"}),
            premium_users=await db[USERS].count_documents({"role": "premium"}),
            total_revenue=await self.total_revenue(db),
        )
        logger.debug("Collected platform stats: %s", stats)
        return stats


# ── Singleton Instance ────────────────────────────────────────────────────
stats_service = StatsService()
