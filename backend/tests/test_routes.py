"""
SoulFinder Backend: HTTP Route Tests
=======================================

What we test:
    ✅ Status codes and body shapes of the public surface
    ✅ Query-parameter validation on /all-bio (400, never 500)
    ✅ End-to-end favorites, contact-request and premium flows
    ✅ Payment intent body and role administration
"""

import pytest

from soulfinder.database import BIODATA, CONTACT_REQUESTS, FAVORITES, USERS

from conftest import ADMIN_EMAIL, USER_EMAIL, bearer


class TestRoot:

    @pytest.mark.asyncio
    async def test_liveness_text(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.text == "SoulFinder server is running"
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"


class TestProfileRoutes:

    @pytest.mark.asyncio
    async def test_listing_shape(self, test_client, db):
        await db[BIODATA].insert_many(
            [{"biodataId": i, "email": f"p{i}@x.com", "biodataType": "Female", "age": 25} for i in range(1, 6)]
        )

        response = await test_client.get("/all-bio", params={"limit": 2, "page": 2, "type": "Female"})

        assert response.status_code == 200
        body = response.json()
        assert body["totalCount"] == 5
        assert body["totalPages"] == 3
        assert body["currentPage"] == 2
        assert [p["biodataId"] for p in body["data"]] == [3, 4]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"limit": 0}, {"page": 0}, {"limit": -3}, {"minAge": "abc"}])
    async def test_bad_pagination_is_400(self, test_client, params):
        response = await test_client.get("/all-bio", params=params)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_edit_then_read_own_profile(self, test_client):
        created = await test_client.patch(
            "/edit-bio-data",
            json={"name": "User", "biodataType": "Male", "age": 30},
            headers=bearer("user-token"),
        )
        assert created.status_code == 200
        assert created.json() == {"message": "Biodata created", "biodataId": 1, "created": True}

        updated = await test_client.patch(
            "/edit-bio-data",
            json={"email": USER_EMAIL, "age": 31, "biodataId": 50},
            headers=bearer("user-token"),
        )
        assert updated.json()["biodataId"] == 1
        assert updated.json()["created"] is False

        mine = await test_client.get(f"/my-bio/{USER_EMAIL}", headers=bearer("user-token"))
        assert mine.status_code == 200
        assert mine.json()["age"] == 31
        assert mine.json()["biodataId"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"minAge": 10**19},
            {"maxAge": 151},
            {"minAge": -1},
            {"limit": 101},
            {"page": 10**19},
            {"page": 2**62},
        ],
    )
    async def test_out_of_range_listing_values_are_400(self, test_client, params):
        response = await test_client.get("/all-bio", params=params)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_oversized_exclude_is_400(self, test_client):
        response = await test_client.get("/similar-biodata/Male", params={"exclude": 10**19})
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"height": 10**20}, {"family": {"siblings": [1, 10**20]}}])
    async def test_oversized_integer_in_profile_body_is_400(self, test_client, db, body):
        response = await test_client.patch("/edit-bio-data", json=body, headers=bearer("user-token"))

        assert response.status_code == 400
        assert await db[BIODATA].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_owner_edit_cannot_change_category(self, test_client, db):
        await test_client.patch("/edit-bio-data", json={"age": 30}, headers=bearer("user-token"))

        cleared = await test_client.patch("/edit-bio-data", json={"category": None}, headers=bearer("user-token"))
        promoted = await test_client.patch(
            "/edit-bio-data", json={"category": "premium"}, headers=bearer("user-token")
        )

        assert cleared.status_code == 200
        assert promoted.status_code == 200
        stored = await db[BIODATA].find_one({"email": USER_EMAIL})
        assert stored["category"] == "normal"

    @pytest.mark.asyncio
    async def test_edit_for_another_email_is_403(self, test_client, db):
        response = await test_client.patch(
            "/edit-bio-data", json={"email": "other@x.com", "age": 40}, headers=bearer("user-token")
        )
        assert response.status_code == 403
        assert await db[BIODATA].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_missing_own_profile_is_404(self, test_client):
        response = await test_client.get(f"/my-bio/{USER_EMAIL}", headers=bearer("user-token"))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_single_profile_by_store_id(self, test_client, db):
        inserted = await db[BIODATA].insert_one({"biodataId": 9, "email": "p@x.com", "biodataType": "Male"})

        response = await test_client.get(f"/get-bio/{inserted.inserted_id}", headers=bearer("user-token"))
        alias = await test_client.get(f"/all-bio/{inserted.inserted_id}", headers=bearer("user-token"))

        assert response.status_code == 200
        assert response.json()["biodataId"] == 9
        assert response.json()["isFavorite"] is False
        assert alias.json() == response.json()

    @pytest.mark.asyncio
    async def test_malformed_store_id_is_400(self, test_client):
        response = await test_client.get("/get-bio/zzz", headers=bearer("user-token"))
        assert response.status_code == 400


class TestFavoriteRoutes:

    @pytest.mark.asyncio
    async def test_add_duplicate_and_remove(self, test_client, db):
        body = {"biodataId": 3, "name": "Rina"}

        first = await test_client.post(f"/favorite-bios/{USER_EMAIL}", json=body)
        again = await test_client.post(f"/favorite-bios/{USER_EMAIL}", json=body)

        assert first.status_code == 201
        assert again.status_code == 409

        removed = await test_client.delete("/favorite-bios/3", headers=bearer("user-token"))
        assert removed.status_code == 200
        assert await db[FAVORITES].count_documents({}) == 0

        missing = await test_client.delete("/favorite-bios/3", headers=bearer("user-token"))
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_oversized_ids_are_400(self, test_client, db):
        added = await test_client.post(f"/favorite-bios/{USER_EMAIL}", json={"biodataId": 10**19})
        snapshot = await test_client.post(
            f"/favorite-bios/{USER_EMAIL}", json={"biodataId": 1, "age": 10**20}
        )
        removed = await test_client.delete(f"/favorite-bios/{10**19}", headers=bearer("user-token"))

        assert added.status_code == 400
        assert snapshot.status_code == 400
        assert removed.status_code == 400
        assert await db[FAVORITES].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_remove_requires_token(self, test_client):
        response = await test_client.delete("/favorite-bios/3")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_my_favorites(self, test_client):
        await test_client.post(f"/favorite-bios/{USER_EMAIL}", json={"biodataId": 1})
        await test_client.post("/favorite-bios/other@x.com", json={"biodataId": 2})

        response = await test_client.get(f"/my-favorites/{USER_EMAIL}", headers=bearer("user-token"))

        assert [f["biodataId"] for f in response.json()] == [1]


class TestContactRequestRoutes:

    @pytest.mark.asyncio
    async def test_duplicate_request_is_400(self, test_client, db):
        body = {"biodataId": 4, "email": USER_EMAIL, "name": "U", "transactionId": "pi_1", "fee": 5}

        first = await test_client.post("/contact-req", json=body)
        again = await test_client.post("/contact-req", json=body)

        assert first.status_code == 201
        assert again.status_code == 400
        assert await db[CONTACT_REQUESTS].count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_list_and_remove_own_requests(self, test_client):
        for biodata_id in (4, 5):
            await test_client.post(
                "/contact-req",
                json={"biodataId": biodata_id, "email": USER_EMAIL, "transactionId": f"pi_{biodata_id}", "fee": 5},
            )

        listed = await test_client.get(f"/contact-req/{USER_EMAIL}", headers=bearer("user-token"))
        assert len(listed.json()) == 2

        removed = await test_client.delete(
            f"/contact-req/{USER_EMAIL}", params={"biodataId": 4}, headers=bearer("user-token")
        )
        assert removed.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_admin_approves(self, test_client, admin_account):
        created = await test_client.post(
            "/contact-req", json={"biodataId": 4, "email": USER_EMAIL, "transactionId": "pi_1", "fee": 5}
        )

        approved = await test_client.patch(
            f"/contact-req-approve/{created.json()['id']}", headers=bearer("admin-token")
        )
        listed = await test_client.get("/contact-req", headers=bearer("admin-token"))

        assert approved.status_code == 200
        assert listed.json()[0]["status"] == "approved"


class TestPremiumRoutes:

    @pytest.mark.asyncio
    async def test_request_and_approve(self, test_client, db, admin_account):
        await db[BIODATA].insert_one({"biodataId": 1, "email": USER_EMAIL, "category": "normal"})

        requested = await test_client.post(
            f"/premium-request/{USER_EMAIL}", json={"name": "U", "biodataId": 1}, headers=bearer("user-token")
        )
        duplicate = await test_client.post(f"/premium-request/{USER_EMAIL}", headers=bearer("user-token"))
        pending = await test_client.get("/premium-request", headers=bearer("admin-token"))
        approved = await test_client.patch(f"/premium-role-update/{USER_EMAIL}", headers=bearer("admin-token"))

        assert requested.status_code == 201
        assert duplicate.status_code == 409
        assert [r["email"] for r in pending.json()] == [USER_EMAIL]
        assert approved.status_code == 200
        profile = await db[BIODATA].find_one({"email": USER_EMAIL})
        assert profile["category"] == "premium"

    @pytest.mark.asyncio
    async def test_approve_without_request_is_404(self, test_client, admin_account):
        response = await test_client.patch(f"/premium-role-update/{USER_EMAIL}", headers=bearer("admin-token"))
        assert response.status_code == 404


class TestPaymentRoutes:

    @pytest.mark.asyncio
    async def test_returns_client_secret(self, test_client, payment_gateway):
        response = await test_client.post("/create-payment-intent", json={"price": 5.99})

        assert response.status_code == 200
        assert response.json() == {"clientSecret": "pi_test_secret_599"}
        assert payment_gateway.prices == [5.99]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"price": 0}, {"price": -1}, {"price": "free"}])
    async def test_invalid_price_is_400(self, test_client, payment_gateway, body):
        response = await test_client.post("/create-payment-intent", json=body)

        assert response.status_code == 400
        assert payment_gateway.prices == []


class TestAccountRoutes:

    @pytest.mark.asyncio
    async def test_login_creates_then_touches(self, test_client, db):
        first = await test_client.post("/add-users", json={"email": USER_EMAIL, "name": "U"})
        second = await test_client.post("/add-users", json={"email": USER_EMAIL, "name": "U"})

        assert first.json()["created"] is True
        assert second.json()["created"] is False
        assert await db[USERS].count_documents({"email": USER_EMAIL}) == 1

    @pytest.mark.asyncio
    async def test_own_role(self, test_client):
        await test_client.post("/add-users", json={"email": USER_EMAIL})

        response = await test_client.get(f"/user-role/{USER_EMAIL}", headers=bearer("user-token"))

        assert response.json() == {"email": USER_EMAIL, "role": "normal"}

    @pytest.mark.asyncio
    async def test_update_role_is_admin_only(self, test_client, db, admin_account):
        await test_client.post("/add-users", json={"email": USER_EMAIL})

        refused = await test_client.patch(
            f"/update-role/{USER_EMAIL}", json={"role": "admin"}, headers=bearer("user-token")
        )
        accepted = await test_client.patch(
            f"/update-role/{USER_EMAIL}", json={"role": "premium"}, headers=bearer("admin-token")
        )
        unknown_role = await test_client.patch(
            f"/update-role/{USER_EMAIL}", json={"role": "owner"}, headers=bearer("admin-token")
        )

        assert refused.status_code == 403
        assert accepted.status_code == 200
        assert unknown_role.status_code == 400
        stored = await db[USERS].find_one({"email": USER_EMAIL})
        assert stored["role"] == "premium"

    @pytest.mark.asyncio
    async def test_stats_for_admin(self, test_client, admin_account):
        response = await test_client.get("/all-info", headers=bearer("admin-token"))

        assert response.status_code == 200
        assert set(response.json()) == {
            "totalBiodata",
            "maleBiodata",
            "femaleBiodata",
            "premiumBiodata",
            "premiumUsers",
            "totalRevenue",
        }


class TestSuccessStoryRoutes:

    @pytest.mark.asyncio
    async def test_submit_and_list(self, test_client):
        body = {
            "selfBiodataId": 1,
            "partnerBiodataId": 2,
            "review": "We met here.",
            "marriageDate": "2024-03-01",
            "rating": 5,
        }
        older = dict(body, marriageDate="2022-01-15")

        created = await test_client.post("/success-stories", json=body, headers=bearer("user-token"))
        await test_client.post("/success-stories", json=older, headers=bearer("other-token"))
        listed = await test_client.get("/success-stories")

        assert created.status_code == 201
        assert [s["marriageDate"] for s in listed.json()] == ["2024-03-01", "2022-01-15"]

    @pytest.mark.asyncio
    async def test_submit_requires_token(self, test_client):
        response = await test_client.post(
            "/success-stories",
            json={"selfBiodataId": 1, "partnerBiodataId": 2, "review": "Hi", "marriageDate": "2024-01-01"},
        )
        assert response.status_code == 401
