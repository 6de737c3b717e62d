"""
SoulFinder Backend: Profile (Biodata) Route Handlers
=======================================================

What:  Public listing and similar-profile lookups, and bearer-guarded
       reads and edits of profiles.
Who:   Called by the frontend's browse page, profile detail page and the
       "Edit Biodata" dashboard form.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.dependencies import get_database
from soulfinder.schemas.auth import Identity
from soulfinder.schemas.common import BSON_INT64_MAX, ErrorResponse
from soulfinder.schemas.profile import ProfilePage, ProfileSubmission, ProfileUpsertResponse
from soulfinder.security import ensure_same_account, verify_token
from soulfinder.services.profile_service import DEFAULT_PAGE_SIZE, MAX_AGE, MAX_PAGE_SIZE, profile_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Biodata"])


@router.get(
    "/all-bio",
    response_model=ProfilePage,
    responses={400: {"description": "Invalid pagination", "model": ErrorResponse}},
    summary="List profiles with filters and pagination",
)
async def list_profiles(
    type: Optional[str] = Query(default=None, description="Category filter (biodataType), e.g. Male"),
    division: Optional[str] = Query(default=None, description="Region filter (permanentDivision)"),
    minAge: Optional[int] = Query(default=None, ge=0, le=MAX_AGE, description="Minimum age, inclusive"),
    maxAge: Optional[int] = Query(default=None, ge=0, le=MAX_AGE, description="Maximum age, inclusive"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, description=f"Page size; 1 to {MAX_PAGE_SIZE}"),
    page: int = Query(default=1, le=BSON_INT64_MAX, description="One-indexed page number; must be >= 1"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProfilePage:
    return await profile_service.list_profiles(
        db,
        biodata_type=type,
        division=division,
        min_age=minAge,
        max_age=maxAge,
        page_size=limit,
        page=page,
    )


@router.get(
    "/my-bio/{email}",
    responses={404: {"description": "No profile yet", "model": ErrorResponse}},
    summary="Caller's own profile",
)
async def my_profile(
    email: str,
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    owner = ensure_same_account(identity, email)
    return await profile_service.get_by_owner(db, owner)


@router.patch(
    "/edit-bio-data",
    response_model=ProfileUpsertResponse,
    summary="Create or update the caller's profile",
)
async def edit_profile(
    submission: ProfileSubmission,
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProfileUpsertResponse:
    owner = ensure_same_account(identity, submission.email or identity.email)
    return await profile_service.upsert_profile(db, owner, submission)


@router.get(
    "/get-bio/{profile_id}",
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Profile not found", "model": ErrorResponse},
    },
    summary="Single profile with the caller's favorite flag",
)
@router.get("/all-bio/{profile_id}", include_in_schema=False)
async def get_profile(
    profile_id: str,
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await profile_service.get_with_favorite_flag(db, profile_id, identity.email)


@router.get("/similar-biodata/{biodata_type}", summary="Up to three profiles of the same category")
async def similar_profiles(
    biodata_type: str,
    exclude: Optional[int] = Query(default=None, le=BSON_INT64_MAX, description="biodataId to leave out"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await profile_service.similar_profiles(db, biodata_type, exclude)
