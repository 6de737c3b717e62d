"""
SoulFinder Backend: Dependency Wiring
========================================

What:  FastAPI dependency providers for the shared, long-lived collaborators.
How:   The lifespan handler in main.py constructs the Motor database handle,
       the token verifier and the payment gateway once and stores them on
       `app.state`; these providers hand them to route handlers per request.
       Tests replace them through `app.dependency_overrides`.
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.requests import Request

from soulfinder.services.payment_service import PaymentGateway
from soulfinder.services.token_verifier import TokenVerifier


def get_database(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.db


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway
