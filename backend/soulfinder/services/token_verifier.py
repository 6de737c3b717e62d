"""
SoulFinder Backend: Bearer Token Verification
================================================

What:  Abstract token-verifier contract plus the Firebase Admin implementation.
How:   `TokenVerifier.verify()` takes the raw bearer token and returns the
       decoded claims as an `Identity`, or raises:
         - InvalidCredentialError (403) when the token is rejected
         - UpstreamServiceError (500) when the verifier cannot be reached
Who:   Constructed once in the app lifespan; called by the authentication
       gate in security.py for every guarded route.

No caching of verification results and no retry; expiry handling is
whatever firebase-admin enforces.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import auth, credentials
from starlette.concurrency import run_in_threadpool

from soulfinder.exceptions import InvalidCredentialError, UpstreamServiceError
from soulfinder.schemas.auth import Identity

logger = logging.getLogger(__name__)


class TokenVerifier(ABC):
    """
    Contract for bearer-token verification providers.

    Implementations:
        - FirebaseTokenVerifier: Firebase Authentication ID tokens
        - tests substitute a fake via FastAPI dependency overrides
    """

    @abstractmethod
    async def verify(self, token: str) -> Identity:
        """Verify `token` and return the caller's identity."""
        ...

    def close(self) -> None:
        """Release provider resources. Default: nothing to release."""


def identity_from_claims(claims: Dict[str, Any]) -> Identity:
    """
    Build an Identity from decoded token claims.

    Raises InvalidCredentialError when the claims carry no email; every
    guarded route keys its data by email.
    """
    email = claims.get("email")
    if not email:
        raise InvalidCredentialError(context={"reason": "token has no email claim"})
    return Identity(
        uid=str(claims.get("uid") or claims.get("sub") or ""),
        email=str(email).lower(),
        claims=claims,
    )


class FirebaseTokenVerifier(TokenVerifier):
    """
    Verifies Firebase ID tokens with the Admin SDK.

    The Admin SDK call is blocking (it may fetch Google's public
    certificates over HTTP), so it runs in Starlette's thread pool.
    """

    APP_NAME = "soulfinder"

    def __init__(self, credentials_path: str, app: Optional[firebase_admin.App] = None):
        if app is None:
            cred = credentials.Certificate(credentials_path)
            app = firebase_admin.initialize_app(cred, name=self.APP_NAME)
            logger.info("Firebase Admin initialized from %s", credentials_path)
        self._app = app

    async def verify(self, token: str) -> Identity:
        try:
            claims = await run_in_threadpool(auth.verify_id_token, token, app=self._app)
        except auth.CertificateFetchError as e:
            logger.error("Could not fetch Firebase signing certificates: %s", e)
            raise UpstreamServiceError(
                message="Authentication service is temporarily unavailable.",
                context={"provider": "firebase"},
            )
        except (auth.InvalidIdTokenError, auth.UserDisabledError, ValueError) as e:
            logger.info("Rejected bearer token: %s", type(e).__name__)
            raise InvalidCredentialError(context={"reason": type(e).__name__})
        return identity_from_claims(claims)

    def close(self) -> None:
        firebase_admin.delete_app(self._app)
