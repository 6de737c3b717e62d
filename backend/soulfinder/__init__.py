"""
SoulFinder Backend: Application Package Initializer
=====================================================

What: Marks the `soulfinder` directory as a Python package.
Who:  Imported by uvicorn (`soulfinder.main:app`), pytest, and every module
      via `from soulfinder.config import get_settings`.

Architecture Note:
    The backend is a layered FastAPI service over MongoDB:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth gates
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← filters, upserts, workflows
    ├─────────────────────────────────────┤
    │         Schemas (API contracts)     │  ← Pydantic request/response
    ├─────────────────────────────────────┤
    │        Database (Motor client)      │  ← collections, indexes, sequences
    └─────────────────────────────────────┘

    External providers (Firebase token verification, Stripe payment
    intents) sit beside the services layer as injected adapters.
"""

__version__ = "1.0.0"
