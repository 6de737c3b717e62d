"""
SoulFinder Backend: Success Story Service
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from soulfinder.database import SUCCESS_STORIES, serialize_document
from soulfinder.schemas.story import SuccessStoryCreated, SuccessStorySubmission
from soulfinder.services.account_service import utc_now_iso

logger = logging.getLogger(__name__)


class SuccessStoryService:

    async def submit(
        self,
        db: AsyncIOMotorDatabase,
        email: str,
        submission: SuccessStorySubmission,
    ) -> SuccessStoryCreated:
        document = submission.model_dump()
        # Stored as an ISO date string so it sorts chronologically
        document["marriageDate"] = submission.marriageDate.isoformat()
        document["email"] = email
        document["created_at"] = utc_now_iso()
        result = await db[SUCCESS_STORIES].insert_one(document)
        logger.info("Success story recorded by %s", email)
        return SuccessStoryCreated(message="Success story submitted", id=str(result.inserted_id))

    async def list_stories(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        docs = await db[SUCCESS_STORIES].find({}).sort("marriageDate", -1).to_list(length=None)
        return [serialize_document(d) for d in docs]


# ── Singleton Instance ────────────────────────────────────────────────────
success_story_service = SuccessStoryService()
