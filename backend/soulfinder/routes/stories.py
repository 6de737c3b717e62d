"""
SoulFinder Backend: Success Story Route Handlers
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.dependencies import get_database
from soulfinder.schemas.auth import Identity
from soulfinder.schemas.story import SuccessStoryCreated, SuccessStorySubmission
from soulfinder.security import verify_token
from soulfinder.services.story_service import success_story_service

router = APIRouter(tags=["Success Stories"])


@router.get("/success-stories", summary="Success stories, newest marriage first")
async def list_stories(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[Dict[str, Any]]:
    return await success_story_service.list_stories(db)


@router.post(
    "/success-stories",
    response_model=SuccessStoryCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Share a success story",
)
async def submit_story(
    submission: SuccessStorySubmission,
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> SuccessStoryCreated:
    return await success_story_service.submit(db, identity.email, submission)
