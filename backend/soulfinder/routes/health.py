"""
SoulFinder Backend: Health Check Routes
==========================================

What:  Liveness (`GET /`) and dependency health (`GET /health`).
How:   /health pings MongoDB; an unreachable store reports "unhealthy"
       with HTTP 503 so load balancers route away.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from soulfinder import __version__
from soulfinder.dependencies import get_database
from soulfinder.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness probe")
async def root() -> str:
    return "SoulFinder server is running"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(db: AsyncIOMotorDatabase = Depends(get_database)):
    db_status = "connected"
    try:
        await db.command("ping")
    except PyMongoError as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if db_status != "connected":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
