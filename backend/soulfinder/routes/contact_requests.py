"""
SoulFinder Backend: Contact Request Route Handlers
=====================================================

What:  Submission after payment (open), the requester's own list and
       removal (bearer), and admin listing/approval.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.dependencies import get_database
from soulfinder.schemas.auth import Identity
from soulfinder.schemas.common import BSON_INT64_MAX, ErrorResponse, MessageResponse
from soulfinder.schemas.contact import ContactRequestCreated, ContactRequestSubmission
from soulfinder.security import ensure_same_account, verify_admin, verify_token
from soulfinder.services.contact_service import contact_request_service

router = APIRouter(tags=["Contact Requests"])


@router.post(
    "/contact-req",
    response_model=ContactRequestCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Already requested", "model": ErrorResponse}},
    summary="Submit a paid contact request",
)
async def submit_contact_request(
    submission: ContactRequestSubmission,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ContactRequestCreated:
    return await contact_request_service.submit(db, submission)


@router.get("/contact-req", summary="All contact requests (admin)")
async def list_contact_requests(
    _: Identity = Depends(verify_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await contact_request_service.list_all(db)


@router.get("/contact-req/{email}", summary="The caller's contact requests")
async def my_contact_requests(
    email: str,
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await contact_request_service.list_for_requester(db, ensure_same_account(identity, email))


@router.delete(
    "/contact-req/{email}",
    response_model=MessageResponse,
    responses={404: {"description": "Nothing to remove", "model": ErrorResponse}},
    summary="Remove the caller's contact request(s)",
)
async def remove_contact_requests(
    email: str,
    biodataId: Optional[int] = Query(
        default=None, le=BSON_INT64_MAX, description="Remove only the request for this profile"
    ),
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    removed = await contact_request_service.remove(db, ensure_same_account(identity, email), biodataId)
    return MessageResponse(message="Contact request removed", count=removed)


@router.patch(
    "/contact-req-approve/{request_id}",
    response_model=MessageResponse,
    responses={404: {"description": "No such request", "model": ErrorResponse}},
    summary="Approve a contact request (admin)",
)
async def approve_contact_request(
    request_id: str,
    _: Identity = Depends(verify_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    await contact_request_service.approve(db, request_id)
    return MessageResponse(message="Contact request approved")
