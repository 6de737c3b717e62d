"""
SoulFinder Backend: Favorite Service
=======================================

What:  Add/remove a requester in a profile's favorite record.
How:   One record per profile (`biodataId`) holding the set of requester
       emails in `setBy`.

Invariant:
    A favorite record never exists with an empty `setBy`. Removing the
    last requester deletes the record.

Remove Flow:
    $pull email from the record that contains it
      ├── matched nothing → NotFoundError
      └── delete the record if (and only if) setBy is now empty

    The delete filter itself checks emptiness, so a requester added
    between the two steps keeps the record alive.
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from soulfinder.database import FAVORITES, serialize_document
from soulfinder.exceptions import ConflictError, NotFoundError
from soulfinder.schemas.favorite import FavoriteAddResponse, FavoriteSubmission

logger = logging.getLogger(__name__)


class FavoriteService:
    """Business logic for favorite records."""

    async def add_favorite(
        self,
        db: AsyncIOMotorDatabase,
        requester_email: str,
        submission: FavoriteSubmission,
    ) -> FavoriteAddResponse:
        """
        Set-insert the requester into the profile's favorite record.

        Raises:
            ConflictError: the requester had already favorited this profile
        """
        requester_email = requester_email.lower()
        update: Dict[str, Any] = {"$addToSet": {"setBy": requester_email}}
        snapshot = submission.snapshot()
        if snapshot:
            update["$setOnInsert"] = snapshot

        try:
            result = await db[FAVORITES].update_one(
                {"biodataId": submission.biodataId}, update, upsert=True
            )
        except DuplicateKeyError:
            # Two first-favorites for the same profile raced on the upsert;
            # the record exists now, so a plain update is safe.
            result = await db[FAVORITES].update_one(
                {"biodataId": submission.biodataId}, {"$addToSet": {"setBy": requester_email}}
            )

        if result.upserted_id is not None:
            logger.info("Favorite record created for biodataId=%d by %s", submission.biodataId, requester_email)
            return FavoriteAddResponse(message="Added to favorites.", created=True)
        if result.modified_count == 0:
            raise ConflictError(message="Already added to favorites.")
        return FavoriteAddResponse(message="Added to favorites.", created=False)

    async def remove_favorite(self, db: AsyncIOMotorDatabase, biodata_id: int, requester_email: str) -> bool:
        """
        Set-remove the requester; delete the record once nobody is left.

        Returns:
            True when the record was deleted because the list became empty.

        Raises:
            NotFoundError: the requester had not favorited this profile
        """
        requester_email = requester_email.lower()
        pulled = await db[FAVORITES].update_one(
            {"biodataId": biodata_id, "setBy": requester_email},
            {"$pull": {"setBy": requester_email}},
        )
        if not pulled.matched_count:
            raise NotFoundError(resource="favorite", resource_id=str(biodata_id))

        deleted = await db[FAVORITES].delete_one({"biodataId": biodata_id, "setBy": {"$size": 0}})
        if deleted.deleted_count:
            logger.info("Favorite record for biodataId=%d removed (last requester left)", biodata_id)
        return bool(deleted.deleted_count)

    async def list_all(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        docs = await db[FAVORITES].find({}).to_list(length=None)
        return [serialize_document(d) for d in docs]

    async def list_for_requester(self, db: AsyncIOMotorDatabase, requester_email: str) -> List[Dict[str, Any]]:
        docs = await db[FAVORITES].find({"setBy": requester_email.lower()}).to_list(length=None)
        return [serialize_document(d) for d in docs]


# ── Singleton Instance ────────────────────────────────────────────────────
favorite_service = FavoriteService()
