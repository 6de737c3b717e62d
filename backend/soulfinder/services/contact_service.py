"""
SoulFinder Backend: Contact Request Service
==============================================

What:  Paid requests for a profile's contact details.
How:   At most one request per (biodataId, requester email): a lookup
       rejects known duplicates, and the unique index rejects the ones
       that race past the lookup.
Who:   Called by routes/contact_requests.py.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from soulfinder.database import CONTACT_REQUESTS, parse_object_id, serialize_document
from soulfinder.exceptions import NotFoundError, ValidationError
from soulfinder.schemas.contact import ContactRequestCreated, ContactRequestSubmission
from soulfinder.services.account_service import utc_now_iso

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"


def _already_requested(biodata_id: int, email: str) -> ValidationError:
    return ValidationError(
        message="You have already requested contact information for this biodata.",
        context={"reason": "already_requested", "biodataId": biodata_id, "email": email},
    )


class ContactRequestService:
    """Business logic for contact requests."""

    async def submit(self, db: AsyncIOMotorDatabase, submission: ContactRequestSubmission) -> ContactRequestCreated:
        """
        Record a contact request with status "pending".

        Raises:
            ValidationError: a request for this (biodataId, email) pair exists (→ 400)
        """
        email = submission.email.lower()
        pair = {"biodataId": submission.biodataId, "email": email}

        if await db[CONTACT_REQUESTS].find_one(pair, projection={"_id": 1}) is not None:
            raise _already_requested(submission.biodataId, email)

        document = {
            **pair,
            "name": submission.name,
            "transactionId": submission.transactionId,
            "fee": submission.fee,
            "status": STATUS_PENDING,
            "requested_at": utc_now_iso(),
        }
        try:
            result = await db[CONTACT_REQUESTS].insert_one(document)
        except DuplicateKeyError:
            raise _already_requested(submission.biodataId, email)

        logger.info("Contact request for biodataId=%d by %s (txn %s)", submission.biodataId, email, submission.transactionId)
        return ContactRequestCreated(message="Contact request submitted", id=str(result.inserted_id))

    async def list_for_requester(self, db: AsyncIOMotorDatabase, email: str) -> List[Dict[str, Any]]:
        docs = await db[CONTACT_REQUESTS].find({"email": email.lower()}).to_list(length=None)
        return [serialize_document(d) for d in docs]

    async def list_all(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        docs = await db[CONTACT_REQUESTS].find({}).to_list(length=None)
        return [serialize_document(d) for d in docs]

    async def remove(self, db: AsyncIOMotorDatabase, email: str, biodata_id: Optional[int] = None) -> int:
        """
        Delete the requester's contact requests: one pair when `biodata_id`
        is given, otherwise all of them.

        Raises:
            NotFoundError: nothing matched
        """
        query: Dict[str, Any] = {"email": email.lower()}
        if biodata_id is not None:
            query["biodataId"] = biodata_id
        result = await db[CONTACT_REQUESTS].delete_many(query)
        if not result.deleted_count:
            raise NotFoundError(resource="contact request", resource_id=email)
        return result.deleted_count

    async def approve(self, db: AsyncIOMotorDatabase, request_id: str) -> None:
        result = await db[CONTACT_REQUESTS].update_one(
            {"_id": parse_object_id(request_id)},
            {"$set": {"status": STATUS_APPROVED, "approved_at": utc_now_iso()}},
        )
        if not result.matched_count:
            raise NotFoundError(resource="contact request", resource_id=request_id)


# ── Singleton Instance ────────────────────────────────────────────────────
contact_request_service = ContactRequestService()
