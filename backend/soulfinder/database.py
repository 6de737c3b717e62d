"""
SoulFinder Backend: MongoDB Connection Management
====================================================

What:  Motor client construction, collection names, index/sequence
       bootstrap, and document serialization helpers.
How:   `create_client()` builds one pooled AsyncIOMotorClient at startup;
       `prepare_database()` creates unique indexes and seeds sequences;
       the lifespan handler closes the client at shutdown.
Who:   The app lifespan (open/close), dependencies.py (per-request handle),
       and every service (collection names, helpers).

Connection Pooling:
    AsyncIOMotorClient owns a connection pool and is safe for concurrent
    use by every request; no locking is needed on our side. Timeouts are
    applied to server selection, connect and socket operations so a
    stalled cluster surfaces as a PyMongoError instead of a hung request.
"""

import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from soulfinder.config import Settings
from soulfinder.exceptions import ValidationError

logger = logging.getLogger(__name__)


# ── Collection Names ──────────────────────────────────────────────────────
BIODATA = "biodata"
USERS = "users"
FAVORITES = "favorite"
CONTACT_REQUESTS = "contactRequest"
PREMIUM_REQUESTS = "premiumRequest"
SUCCESS_STORIES = "successStory"
COUNTERS = "counters"

# Sequence name for the domain profile identifier
BIODATA_SEQUENCE = "biodataId"


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Build the process-wide Motor client.

    Motor connects lazily: no network traffic happens until the first
    operation, so this is safe to call before the cluster is reachable.
    """
    timeout = settings.mongodb_timeout_ms
    return AsyncIOMotorClient(
        settings.mongo_connection_uri,
        serverSelectionTimeoutMS=timeout,
        connectTimeoutMS=timeout,
        socketTimeoutMS=timeout,
        tz_aware=True,
    )


async def prepare_database(db: AsyncIOMotorDatabase) -> None:
    """
    Create unique indexes and seed the profile id sequence.

    What:    Enforces the one-per-key invariants at the store level.
    When:    Once during startup; idempotent.

    Indexes:
        biodata.email                       unique (one profile per owner)
        biodata.biodataId                   unique (domain identifier)
        users.email                         unique (one account per email)
        favorite.biodataId                  unique (one record per profile)
        contactRequest.(biodataId, email)   unique (one request per pair)
        premiumRequest.email                unique (one outstanding request)
    """
    await db[BIODATA].create_index([("email", ASCENDING)], unique=True, name="biodata_email_unique")
    await db[BIODATA].create_index([("biodataId", ASCENDING)], unique=True, name="biodata_id_unique")
    await db[BIODATA].create_index(
        [("biodataType", ASCENDING), ("permanentDivision", ASCENDING), ("age", ASCENDING)],
        name="biodata_filter_idx",
    )
    await db[USERS].create_index([("email", ASCENDING)], unique=True, name="users_email_unique")
    await db[FAVORITES].create_index([("biodataId", ASCENDING)], unique=True, name="favorite_biodata_unique")
    await db[FAVORITES].create_index([("setBy", ASCENDING)], name="favorite_setby_idx")
    await db[CONTACT_REQUESTS].create_index(
        [("biodataId", ASCENDING), ("email", ASCENDING)],
        unique=True,
        name="contact_pair_unique",
    )
    await db[PREMIUM_REQUESTS].create_index([("email", ASCENDING)], unique=True, name="premium_email_unique")

    await seed_sequence(db, BIODATA_SEQUENCE, await _highest_biodata_id(db))
    logger.info("Database indexes and sequences ready (db=%s)", db.name)


async def _highest_biodata_id(db: AsyncIOMotorDatabase) -> int:
    last = await db[BIODATA].find_one(
        {"biodataId": {"$exists": True}},
        sort=[("biodataId", DESCENDING)],
        projection={"biodataId": 1},
    )
    return int(last["biodataId"]) if last else 0


async def seed_sequence(db: AsyncIOMotorDatabase, name: str, floor: int) -> None:
    """Raise the sequence to at least `floor` without ever lowering it."""
    await db[COUNTERS].update_one({"_id": name}, {"$max": {"seq": floor}}, upsert=True)


async def next_sequence(db: AsyncIOMotorDatabase, name: str) -> int:
    """
    Atomically increment and return the named sequence.

    How:  A single find_one_and_update with $inc, so two concurrent callers
          can never receive the same value.
    """
    counter = await db[COUNTERS].find_one_and_update(
        {"_id": name},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(counter["seq"])


# ── Document Helpers ──────────────────────────────────────────────────────

def serialize_document(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert a raw store document into a JSON-safe dict (`_id` → str)."""
    if doc is None:
        return None
    out = dict(doc)
    if isinstance(out.get("_id"), ObjectId):
        out["_id"] = str(out["_id"])
    return out


def parse_object_id(value: str, field: str = "id") -> ObjectId:
    """Parse a path/query value into an ObjectId or raise ValidationError (400)."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(message=f"'{value}' is not a valid identifier", field=field)
