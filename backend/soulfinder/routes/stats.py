"""
SoulFinder Backend: Admin Statistics Route
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.dependencies import get_database
from soulfinder.schemas.auth import Identity
from soulfinder.schemas.stats import PlatformStats
from soulfinder.security import verify_admin
from soulfinder.services.stats_service import stats_service

router = APIRouter(tags=["Admin"])


@router.get("/all-info", response_model=PlatformStats, summary="Platform statistics (admin)")
async def platform_stats(
    _: Identity = Depends(verify_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> PlatformStats:
    return await stats_service.collect(db)
