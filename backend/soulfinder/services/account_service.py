"""
SoulFinder Backend: Account Service
======================================

What:  Account create-or-touch on login, admin listing with search, role
       lookups and role changes for the `users` collection.
Who:   Called by routes/accounts.py and by the authorization gate.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from soulfinder.database import USERS, serialize_document
from soulfinder.exceptions import NotFoundError
from soulfinder.schemas.account import AccountLogin, AccountLoginResponse

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "normal"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (the stored timestamp format)."""
    return datetime.now(timezone.utc).isoformat()


class AccountService:
    """Business logic for account documents."""

    async def record_login(self, db: AsyncIOMotorDatabase, login: AccountLogin) -> AccountLoginResponse:
        """
        Create the account on first login; afterwards only touch `last_loggedIn`.

        Role and created_at are never changed by a login.
        """
        email = login.email.lower()
        now = utc_now_iso()

        touched = await db[USERS].update_one({"email": email}, {"$set": {"last_loggedIn": now}})
        if touched.matched_count:
            return AccountLoginResponse(message="Login recorded", created=False)

        document = {
            "email": email,
            "name": login.name,
            "photo": login.photo,
            "role": DEFAULT_ROLE,
            "created_at": now,
            "last_loggedIn": now,
        }
        try:
            await db[USERS].insert_one(document)
        except DuplicateKeyError:
            await db[USERS].update_one({"email": email}, {"$set": {"last_loggedIn": now}})
            return AccountLoginResponse(message="Login recorded", created=False)

        logger.info("Created account for %s", email)
        return AccountLoginResponse(message="Account created", created=True)

    async def list_accounts(self, db: AsyncIOMotorDatabase, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """All accounts, optionally narrowed by a case-insensitive name/email substring."""
        query: Dict[str, Any] = {}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query = {"$or": [{"name": pattern}, {"email": pattern}]}
        docs = await db[USERS].find(query).to_list(length=None)
        return [serialize_document(d) for d in docs]

    async def get_role(self, db: AsyncIOMotorDatabase, email: str) -> Optional[str]:
        """Role of the account, or None when no account exists."""
        account = await db[USERS].find_one({"email": email.lower()}, projection={"role": 1})
        return account.get("role") if account else None

    async def update_role(self, db: AsyncIOMotorDatabase, email: str, role: str) -> None:
        result = await db[USERS].update_one({"email": email.lower()}, {"$set": {"role": role}})
        if not result.matched_count:
            raise NotFoundError(resource="account", resource_id=email)
        logger.info("Role of %s set to %s", email, role)


# ── Singleton Instance ────────────────────────────────────────────────────
account_service = AccountService()
