"""
SoulFinder Backend: Premium Workflow Unit Tests
==================================================

What we test:
    ✅ Pending request recorded; duplicates rejected with ConflictError
    ✅ Approval deletes the request and sets the profile category to premium
    ✅ Approval without a pending request → NotFoundError, no profile mutation
    ✅ Approval without a profile → NotFoundError, request back to pending
    ✅ An interrupted approval ("approving") can be completed later
"""

import pytest

from soulfinder.database import BIODATA, PREMIUM_REQUESTS
from soulfinder.exceptions import ConflictError, NotFoundError
from soulfinder.schemas.premium import PremiumRequestSubmission
from soulfinder.services.premium_service import PremiumService


async def insert_profile(db, email: str, biodata_id: int = 1) -> None:
    await db[BIODATA].insert_one({"biodataId": biodata_id, "email": email, "category": "normal"})


class TestRequestPremium:

    def setup_method(self):
        self.service = PremiumService()

    @pytest.mark.asyncio
    async def test_request_is_recorded_pending(self, db):
        await self.service.request_premium(db, "b@x.com", PremiumRequestSubmission(name="B", biodataId=1))

        stored = await db[PREMIUM_REQUESTS].find_one({"email": "b@x.com"})
        assert stored["status"] == "pending"
        assert stored["biodataId"] == 1

    @pytest.mark.asyncio
    async def test_duplicate_request_conflicts(self, db):
        await self.service.request_premium(db, "b@x.com", PremiumRequestSubmission())

        with pytest.raises(ConflictError):
            await self.service.request_premium(db, "b@x.com", PremiumRequestSubmission())

        assert await db[PREMIUM_REQUESTS].count_documents({"email": "b@x.com"}) == 1


class TestApprovePremium:

    def setup_method(self):
        self.service = PremiumService()

    @pytest.mark.asyncio
    async def test_approval_promotes_and_consumes_request(self, db):
        await insert_profile(db, "b@x.com")
        await self.service.request_premium(db, "b@x.com", PremiumRequestSubmission())

        await self.service.approve(db, "b@x.com")

        profile = await db[BIODATA].find_one({"email": "b@x.com"})
        assert profile["category"] == "premium"
        assert await db[PREMIUM_REQUESTS].find_one({"email": "b@x.com"}) is None

    @pytest.mark.asyncio
    async def test_approval_without_request_touches_nothing(self, db):
        await insert_profile(db, "c@x.com")

        with pytest.raises(NotFoundError):
            await self.service.approve(db, "c@x.com")

        profile = await db[BIODATA].find_one({"email": "c@x.com"})
        assert profile["category"] == "normal"

    @pytest.mark.asyncio
    async def test_approval_without_profile_keeps_request_pending(self, db):
        await self.service.request_premium(db, "d@x.com", PremiumRequestSubmission())

        with pytest.raises(NotFoundError):
            await self.service.approve(db, "d@x.com")

        stored = await db[PREMIUM_REQUESTS].find_one({"email": "d@x.com"})
        assert stored["status"] == "pending"

    @pytest.mark.asyncio
    async def test_interrupted_approval_can_be_completed(self, db):
        await insert_profile(db, "e@x.com")
        await db[PREMIUM_REQUESTS].insert_one({"email": "e@x.com", "status": "approving"})

        await self.service.approve(db, "e@x.com")

        profile = await db[BIODATA].find_one({"email": "e@x.com"})
        assert profile["category"] == "premium"
        assert await db[PREMIUM_REQUESTS].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_list_requests(self, db):
        await self.service.request_premium(db, "f@x.com", PremiumRequestSubmission())
        await self.service.request_premium(db, "g@x.com", PremiumRequestSubmission())

        requests = await self.service.list_requests(db)

        assert {r["email"] for r in requests} == {"f@x.com", "g@x.com"}
        assert all(isinstance(r["_id"], str) for r in requests)
