"""
SoulFinder Backend: Profile Service (Biodata)
================================================

What:  Listing with filter + pagination, upsert-by-owner, and single-profile
       reads for the `biodata` collection.
How:   Stateless service; each call receives the Motor database handle.
       Store failures propagate as PyMongoError and are mapped to 500 by
       the global handler.
Who:   Called by routes/profiles.py.

Upsert Flow (PATCH /edit-bio-data):
    find by owner email
      ├── found     → $set submitted fields (biodataId never written;
      │               category is left to the premium workflow)
      └── not found → biodataId = next_sequence("biodataId")
                      category defaults to "normal"
                      insert
                        └── DuplicateKeyError on email (lost a race with a
                            concurrent first submission) → update path
"""

import logging
import math
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from soulfinder.database import (
    BIODATA,
    BIODATA_SEQUENCE,
    FAVORITES,
    next_sequence,
    parse_object_id,
    serialize_document,
)
from soulfinder.exceptions import NotFoundError, ValidationError
from soulfinder.schemas.common import BSON_INT64_MAX
from soulfinder.schemas.profile import ProfilePage, ProfileSubmission, ProfileUpsertResponse

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MAX_AGE = 150
DEFAULT_CATEGORY = "normal"
SIMILAR_LIMIT = 3


def build_profile_filter(
    biodata_type: Optional[str] = None,
    division: Optional[str] = None,
    min_age: Optional[int] = None,
    max_age: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build the conjunctive listing filter.

    Category and region are exact matches when present; age becomes a
    range holding only the bounds that were supplied.

    >>> build_profile_filter("Female", None, 25, None)
    {'biodataType': 'Female', 'age': {'$gte': 25}}
    """
    query: Dict[str, Any] = {}
    if biodata_type:
        query["biodataType"] = biodata_type
    if division:
        query["permanentDivision"] = division
    age: Dict[str, int] = {}
    if min_age is not None:
        age["$gte"] = min_age
    if max_age is not None:
        age["$lte"] = max_age
    if age:
        query["age"] = age
    return query


def page_window(page: int, page_size: int) -> int:
    """
    Return the number of records to skip.

    Rejects a page size outside 1..MAX_PAGE_SIZE, a page below 1, and a
    page so far out that the skip would not fit in a BSON int64.
    """
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValidationError(message=f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit")
    if page < 1:
        raise ValidationError(message="page must be a positive integer", field="page")
    skip = (page - 1) * page_size
    if skip > BSON_INT64_MAX:
        raise ValidationError(message="page is beyond the last possible page", field="page")
    return skip


class ProfileService:
    """
    Business logic for profile documents.

    Responsibilities:
        - list_profiles(): filtered, paginated listing
        - upsert_profile(): create-or-edit keyed by owner email
        - get_by_owner() / get_with_favorite_flag() / similar_profiles()
    """

    async def list_profiles(
        self,
        db: AsyncIOMotorDatabase,
        biodata_type: Optional[str] = None,
        division: Optional[str] = None,
        min_age: Optional[int] = None,
        max_age: Optional[int] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        page: int = 1,
    ) -> ProfilePage:
        """
        One page of profiles plus totals for the pager.

        Returns:
            ProfilePage where totalCount counts every profile matching the
            filter (not just this page) and totalPages = ceil(totalCount / limit).

        Raises:
            ValidationError: limit < 1 or page < 1 (→ 400)
        """
        skip = page_window(page, page_size)
        query = build_profile_filter(biodata_type, division, min_age, max_age)

        total_count = await db[BIODATA].count_documents(query)
        cursor = db[BIODATA].find(query).sort("biodataId", 1).skip(skip).limit(page_size)
        docs = await cursor.to_list(length=page_size)

        logger.debug("Listed %d/%d profiles for filter %s page %d", len(docs), total_count, query, page)
        return ProfilePage(
            data=[serialize_document(d) for d in docs],
            total_count=total_count,
            total_pages=math.ceil(total_count / page_size),
            current_page=page,
        )

    async def upsert_profile(
        self,
        db: AsyncIOMotorDatabase,
        owner_email: str,
        submission: ProfileSubmission,
    ) -> ProfileUpsertResponse:
        """
        Create the owner's profile on first edit, update it afterwards.

        The domain identifier is immutable once assigned: any biodataId in
        the submission is dropped on both paths. A submitted category is
        honored on creation only; later edits never change the tier.
        """
        fields = submission.to_document()
        fields["email"] = owner_email

        existing = await db[BIODATA].find_one({"email": owner_email}, projection={"biodataId": 1})
        if existing is not None:
            return await self._update(db, owner_email, fields, existing["biodataId"])

        biodata_id = await next_sequence(db, BIODATA_SEQUENCE)
        document = {"category": DEFAULT_CATEGORY, **fields, "biodataId": biodata_id}
        if document.get("category") is None:
            document["category"] = DEFAULT_CATEGORY

        try:
            await db[BIODATA].insert_one(document)
        except DuplicateKeyError:
            # A concurrent first submission for this email won; the sequence
            # value we drew is left unused.
            logger.warning("Concurrent profile creation for %s; applying as update", owner_email)
            winner = await db[BIODATA].find_one({"email": owner_email}, projection={"biodataId": 1})
            if winner is None:
                raise
            return await self._update(db, owner_email, fields, winner["biodataId"])

        logger.info("Created profile biodataId=%d for %s", biodata_id, owner_email)
        return ProfileUpsertResponse(message="Biodata created", biodata_id=biodata_id, created=True)

    async def _update(
        self,
        db: AsyncIOMotorDatabase,
        owner_email: str,
        fields: Dict[str, Any],
        biodata_id: int,
    ) -> ProfileUpsertResponse:
        # The membership tier only changes through premium approval
        fields = {k: v for k, v in fields.items() if k != "category"}
        await db[BIODATA].update_one({"email": owner_email}, {"$set": fields})
        logger.info("Updated profile biodataId=%s for %s", biodata_id, owner_email)
        return ProfileUpsertResponse(message="Biodata updated", biodata_id=biodata_id, created=False)

    async def get_by_owner(self, db: AsyncIOMotorDatabase, email: str) -> Dict[str, Any]:
        doc = await db[BIODATA].find_one({"email": email})
        if doc is None:
            raise NotFoundError(resource="biodata", resource_id=email)
        return serialize_document(doc)

    async def get_with_favorite_flag(
        self,
        db: AsyncIOMotorDatabase,
        profile_id: str,
        viewer_email: str,
    ) -> Dict[str, Any]:
        """
        Fetch a profile by store id and flag whether the viewer favorited it.

        Raises:
            ValidationError: malformed id (→ 400)
            NotFoundError: no such profile (→ 404)
        """
        doc = await db[BIODATA].find_one({"_id": parse_object_id(profile_id)})
        if doc is None:
            raise NotFoundError(resource="biodata", resource_id=profile_id)

        favorite = await db[FAVORITES].find_one(
            {"biodataId": doc.get("biodataId"), "setBy": viewer_email},
            projection={"_id": 1},
        )
        out = serialize_document(doc)
        out["isFavorite"] = favorite is not None
        return out

    async def similar_profiles(
        self,
        db: AsyncIOMotorDatabase,
        biodata_type: str,
        exclude_biodata_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Up to three profiles of the same category, excluding one profile."""
        query: Dict[str, Any] = {"biodataType": biodata_type}
        if exclude_biodata_id is not None:
            query["biodataId"] = {"$ne": exclude_biodata_id}
        docs = await db[BIODATA].find(query).limit(SIMILAR_LIMIT).to_list(length=SIMILAR_LIMIT)
        return [serialize_document(d) for d in docs]


# ── Singleton Instance ────────────────────────────────────────────────────
profile_service = ProfileService()
