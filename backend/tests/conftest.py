"""
SoulFinder Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   An in-memory Motor-compatible database (mongomock-motor), fake
       token verifier and payment gateway, and an HTTPX AsyncClient bound
       to a fresh app through dependency overrides. No network, no real
       MongoDB, Firebase or Stripe.

Fixture Hierarchy (all function-scoped):
    ├── db: prepared in-memory database (indexes + sequences)
    ├── token_verifier: FakeTokenVerifier with user/other/admin tokens
    ├── payment_gateway: FakePaymentGateway recording prices
    ├── admin_account: an admin row in `users`
    └── test_client: AsyncClient talking to the app via ASGITransport
"""

import os
from typing import Dict, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_not_real"
os.environ["CORS_ORIGINS"] = "http://localhost:5173"

from soulfinder.database import USERS, prepare_database  # noqa: E402
from soulfinder.dependencies import get_database, get_payment_gateway, get_token_verifier  # noqa: E402
from soulfinder.exceptions import InvalidCredentialError  # noqa: E402
from soulfinder.schemas.auth import Identity  # noqa: E402
from soulfinder.services.payment_service import PaymentGateway, to_minor_units  # noqa: E402
from soulfinder.services.token_verifier import TokenVerifier, identity_from_claims  # noqa: E402

USER_EMAIL = "user@x.com"
OTHER_EMAIL = "other@x.com"
ADMIN_EMAIL = "admin@x.com"


class FakeTokenVerifier(TokenVerifier):
    """Accepts a fixed token → email table; counts calls."""

    def __init__(self, tokens: Dict[str, str]):
        self.tokens = tokens
        self.calls = 0

    async def verify(self, token: str) -> Identity:
        self.calls += 1
        email = self.tokens.get(token)
        if email is None:
            raise InvalidCredentialError()
        return identity_from_claims({"uid": f"uid-{email}", "email": email})


class FakePaymentGateway(PaymentGateway):
    def __init__(self):
        self.prices: List[float] = []

    async def create_payment_intent(self, price: float) -> str:
        self.prices.append(price)
        return f"pi_test_secret_{to_minor_units(price)}"


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database with production indexes and sequences."""
    client = AsyncMongoMockClient()
    database = client["soulfinder_test"]
    await prepare_database(database)
    yield database


@pytest.fixture
def token_verifier():
    return FakeTokenVerifier(
        {
            "user-token": USER_EMAIL,
            "other-token": OTHER_EMAIL,
            "admin-token": ADMIN_EMAIL,
        }
    )


@pytest.fixture
def payment_gateway():
    return FakePaymentGateway()


@pytest_asyncio.fixture
async def admin_account(db):
    await db[USERS].insert_one({"email": ADMIN_EMAIL, "name": "Admin", "role": "admin"})
    return ADMIN_EMAIL


@pytest_asyncio.fixture
async def test_client(db, token_verifier, payment_gateway):
    """
    HTTPX AsyncClient routed straight into a fresh app.

    ASGITransport does not run the lifespan, so the collaborators are
    supplied through dependency overrides instead of app.state.
    """
    from soulfinder.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_token_verifier] = lambda: token_verifier
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
