"""
SoulFinder Backend: FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       the lifespan handler owns the external collaborators.
Who:   uvicorn (`uvicorn soulfinder.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  Request ID → Logging → Timeout → GZip → CORS       │
    │                                                     │
    │  Route dependencies: verify_token → verify_admin    │
    │                                                     │
    │  Exception Handlers:                                │
    │  SoulFinderError → its status │ PyMongoError → 500  │
    │  RequestValidationError → 400 │ Exception → 500     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging, validate configuration
    2. Open the Motor client, create indexes, seed sequences
    3. Initialize the Firebase verifier and the Stripe gateway

    Shutdown:
    1. Release the Firebase app
    2. Close the Motor client (drains the connection pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from soulfinder import __version__
from soulfinder.config import Settings, get_settings
from soulfinder.database import create_client, prepare_database
from soulfinder.exceptions import DatabaseError, SoulFinderError
from soulfinder.middleware.logging import RequestLoggingMiddleware
from soulfinder.middleware.request_id import RequestIDMiddleware, request_id_var
from soulfinder.middleware.timeout import RequestTimeoutMiddleware
from soulfinder.routes import (
    accounts,
    contact_requests,
    favorites,
    health,
    payments,
    premium,
    profiles,
    stats,
    stories,
)
from soulfinder.services.payment_service import StripePaymentGateway
from soulfinder.services.token_verifier import FirebaseTokenVerifier

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Third-party loggers that log every operation are raised to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("stripe").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store and provider clients at startup, close them at shutdown.

    Everything a request needs is placed on `app.state` and handed to
    handlers through the providers in dependencies.py.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info("=" * 60)
    logger.info("SoulFinder Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    client = create_client(settings)
    verifier = None
    try:
        app.state.mongo_client = client
        app.state.db = client[settings.mongodb_database]
        await prepare_database(app.state.db)

        verifier = FirebaseTokenVerifier(settings.firebase_credentials_path)
        app.state.token_verifier = verifier
        app.state.payment_gateway = StripePaymentGateway(
            secret_key=settings.stripe_secret_key,
            currency=settings.payment_currency,
        )

        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.port)
        logger.info("=" * 60)
        yield
    finally:
        # Also reached when startup fails part-way
        logger.info("SoulFinder Backend shutting down...")
        if verifier is not None:
            verifier.close()
        client.close()
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details=None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": details,
        "request_id": request_id_var.get(""),
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure to one JSON error shape.

    Handler hierarchy:
        SoulFinderError         → exc.status_code (400/401/403/404/409/500/504)
        RequestValidationError  → 400 (malformed body or query)
        PyMongoError            → 500 (store failure, generic message)
        Exception (fallback)    → 500 (unexpected errors)

    Internal details (provider errors, stack traces) are logged, never returned.
    """

    @app.exception_handler(SoulFinderError)
    async def handle_app_error(request: Request, exc: SoulFinderError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        details = exc.context if exc.expose_context and exc.context else None
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(_error_body(exc.error_code, exc.message, details)),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder(_error_body("validation_error", "Request validation failed", {"errors": errors})),
        )

    @app.exception_handler(PyMongoError)
    async def handle_store_error(request: Request, exc: PyMongoError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s", rid, str(exc), exc_info=True)
        wrapped = DatabaseError()
        return JSONResponse(
            status_code=wrapped.status_code,
            content=_error_body(wrapped.error_code, wrapped.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Settings = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance. External clients are only
    created when the lifespan runs, so building an app has no side effects.
    """
    settings = settings or get_settings()
    app = FastAPI(
        title="SoulFinder API",
        description="Matchmaking backend: biodata profiles, favorites, contact and premium requests.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(profiles.router)
    app.include_router(accounts.router)
    app.include_router(favorites.router)
    app.include_router(contact_requests.router)
    app.include_router(premium.router)
    app.include_router(payments.router)
    app.include_router(stats.router)
    app.include_router(stories.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("soulfinder.main:app", host=settings.backend_host, port=settings.port)
