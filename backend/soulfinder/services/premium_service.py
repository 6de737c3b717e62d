"""
SoulFinder Backend: Premium Promotion Service
================================================

What:  Two-step premium workflow: a user records a request, an admin
       approves it and the user's profile moves to the "premium" category.

Approval State Machine:
    pending ──(claim)──▶ approving ──(profile updated)──▶ deleted
                            │
                            └──(no profile)──▶ pending (claim reverted)

    The request is deleted only after the profile update succeeded. If the
    process dies between the two steps the request stays "approving" and
    the next approval call picks it up again.

Accepted race:
    The store gives single-document atomicity only. A concurrent edit of
    the same profile can interleave with the steps above; the category
    write is a plain $set and the last writer wins.
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from soulfinder.database import BIODATA, PREMIUM_REQUESTS, serialize_document
from soulfinder.exceptions import ConflictError, NotFoundError
from soulfinder.schemas.premium import PremiumRequestSubmission
from soulfinder.services.account_service import utc_now_iso

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_APPROVING = "approving"
PREMIUM_CATEGORY = "premium"


class PremiumService:
    """Business logic for premium requests."""

    async def request_premium(
        self,
        db: AsyncIOMotorDatabase,
        email: str,
        submission: PremiumRequestSubmission,
    ) -> str:
        """
        Record a pending premium request.

        Raises:
            ConflictError: the email already has an outstanding request
        """
        email = email.lower()
        if await db[PREMIUM_REQUESTS].find_one({"email": email}, projection={"_id": 1}) is not None:
            raise ConflictError(message="A premium request is already pending for this account.")

        document = {
            "email": email,
            "name": submission.name,
            "biodataId": submission.biodataId,
            "status": STATUS_PENDING,
            "requested_at": utc_now_iso(),
        }
        try:
            result = await db[PREMIUM_REQUESTS].insert_one(document)
        except DuplicateKeyError:
            raise ConflictError(message="A premium request is already pending for this account.")

        logger.info("Premium request recorded for %s", email)
        return str(result.inserted_id)

    async def list_requests(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        docs = await db[PREMIUM_REQUESTS].find({}).sort("requested_at", 1).to_list(length=None)
        return [serialize_document(d) for d in docs]

    async def approve(self, db: AsyncIOMotorDatabase, email: str) -> None:
        """
        Promote the email's profile to premium and consume the request.

        Raises:
            NotFoundError: no pending request (no profile is touched), or
                           no profile for the email (request reverted to pending)
        """
        email = email.lower()
        claimed = await db[PREMIUM_REQUESTS].find_one_and_update(
            {"email": email, "status": {"$in": [STATUS_PENDING, STATUS_APPROVING]}},
            {"$set": {"status": STATUS_APPROVING}},
            return_document=ReturnDocument.AFTER,
        )
        if claimed is None:
            raise NotFoundError(resource="premium request", resource_id=email)

        promoted = await db[BIODATA].update_one({"email": email}, {"$set": {"category": PREMIUM_CATEGORY}})
        if not promoted.matched_count:
            await db[PREMIUM_REQUESTS].update_one(
                {"_id": claimed["_id"]}, {"$set": {"status": STATUS_PENDING}}
            )
            raise NotFoundError(resource="biodata", resource_id=email)

        await db[PREMIUM_REQUESTS].delete_one({"_id": claimed["_id"]})
        logger.info("Profile of %s promoted to premium", email)


# ── Singleton Instance ────────────────────────────────────────────────────
premium_service = PremiumService()
