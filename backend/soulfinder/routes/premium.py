"""
SoulFinder Backend: Premium Workflow Route Handlers
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.dependencies import get_database
from soulfinder.schemas.auth import Identity
from soulfinder.schemas.common import ErrorResponse, MessageResponse
from soulfinder.schemas.premium import PremiumRequestSubmission
from soulfinder.security import ensure_same_account, verify_admin, verify_token
from soulfinder.services.premium_service import premium_service

router = APIRouter(tags=["Premium"])


@router.post(
    "/premium-request/{email}",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Request already pending", "model": ErrorResponse}},
    summary="Ask to be upgraded to premium",
)
async def request_premium(
    email: str,
    submission: Optional[PremiumRequestSubmission] = Body(default=None),
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    owner = ensure_same_account(identity, email)
    await premium_service.request_premium(db, owner, submission or PremiumRequestSubmission())
    return MessageResponse(message="Premium request submitted")


@router.get("/premium-request", summary="Outstanding premium requests (admin)")
async def list_premium_requests(
    _: Identity = Depends(verify_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await premium_service.list_requests(db)


@router.patch(
    "/premium-role-update/{email}",
    response_model=MessageResponse,
    responses={404: {"description": "No pending request or no profile", "model": ErrorResponse}},
    summary="Approve a premium request (admin)",
)
async def approve_premium(
    email: str,
    _: Identity = Depends(verify_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    await premium_service.approve(db, email)
    return MessageResponse(message="Biodata promoted to premium")
