"""
SoulFinder Backend: Favorite Route Handlers
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.dependencies import get_database
from soulfinder.schemas.auth import Identity
from soulfinder.schemas.common import BSON_INT64_MAX, ErrorResponse, MessageResponse
from soulfinder.schemas.favorite import FavoriteAddResponse, FavoriteSubmission
from soulfinder.security import ensure_same_account, verify_token
from soulfinder.services.favorite_service import favorite_service

router = APIRouter(tags=["Favorites"])


@router.post(
    "/favorite-bios/{email}",
    response_model=FavoriteAddResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Already a favorite", "model": ErrorResponse}},
    summary="Add a profile to the email's favorites",
)
async def add_favorite(
    email: str,
    submission: FavoriteSubmission,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> FavoriteAddResponse:
    return await favorite_service.add_favorite(db, email, submission)


@router.delete(
    "/favorite-bios/{biodata_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Not a favorite of the caller", "model": ErrorResponse}},
    summary="Remove a profile from the caller's favorites",
)
async def remove_favorite(
    biodata_id: int = Path(le=BSON_INT64_MAX),
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    await favorite_service.remove_favorite(db, biodata_id, identity.email)
    return MessageResponse(message="Removed from favorites.")


@router.get("/favorite-bio", summary="All favorite records")
async def list_favorites(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[Dict[str, Any]]:
    return await favorite_service.list_all(db)


@router.get("/my-favorites/{email}", summary="Profiles the caller has favorited")
async def my_favorites(
    email: str,
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await favorite_service.list_for_requester(db, ensure_same_account(identity, email))
