"""
SoulFinder Backend: Authentication & Authorization Gates
===========================================================

What:  Route dependencies that guard endpoints.
How:

    verify_token (authentication)
        Authorization header missing, or no token after the scheme
            → MissingCredentialError (401), verifier never called
        verifier rejects the token
            → InvalidCredentialError (403)
        otherwise the Identity is attached to request.state.identity

    verify_admin (authorization, runs after verify_token)
        account role != "admin"
            → InsufficientRoleError (403) with the actual role

    ensure_same_account
        caller acting on another email's resources → InsufficientRoleError (403)

Usage:
    @router.get("/all-users")
    async def list_users(identity: Identity = Depends(verify_admin)): ...
"""

import logging
from typing import Optional

from fastapi import Depends, Header
from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.requests import Request

from soulfinder.dependencies import get_database, get_token_verifier
from soulfinder.exceptions import InsufficientRoleError, MissingCredentialError
from soulfinder.schemas.auth import Identity
from soulfinder.services.account_service import account_service
from soulfinder.services.token_verifier import TokenVerifier

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Return the token part of an Authorization header value.

    Raises MissingCredentialError for a missing header or an empty token.
    """
    if not authorization:
        raise MissingCredentialError()
    parts = authorization.strip().split(" ", 1)
    token = parts[1].strip() if len(parts) == 2 else ""
    if not token:
        raise MissingCredentialError()
    return token


async def verify_token(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Identity:
    token = extract_bearer_token(authorization)
    identity = await verifier.verify(token)
    request.state.identity = identity
    return identity


async def verify_admin(
    identity: Identity = Depends(verify_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Identity:
    role = await account_service.get_role(db, identity.email)
    if role != ADMIN_ROLE:
        logger.warning("Admin route refused for %s (role=%s)", identity.email, role)
        raise InsufficientRoleError(role=role, required=ADMIN_ROLE)
    return identity


def ensure_same_account(identity: Identity, email: str) -> str:
    """Return the normalized email when it belongs to the caller."""
    normalized = email.strip().lower()
    if normalized != identity.email:
        raise InsufficientRoleError(
            role=None,
            required="owner",
            message="You can only access your own account's data",
        )
    return normalized
