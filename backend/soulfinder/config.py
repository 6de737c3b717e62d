"""
SoulFinder Backend: Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and `get_settings()` returns one cached
       instance for the process.
Who:   Imported by the app factory, the database layer and the provider
       adapters (Firebase, Stripe).
When:  Loaded on first call to `get_settings()`; validated before the app
       starts serving.
"""

from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments must
    provide the MongoDB credentials, the Firebase service account and the
    Stripe secret key.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── MongoDB ───────────────────────────────────────────────────────────
    # Full connection string. Takes precedence over the credential fields.
    mongodb_uri: Optional[str] = Field(default=None)

    # Atlas-style credentials; used to build an SRV URI when mongodb_uri is unset
    db_user: Optional[str] = Field(default=None)
    db_pass: Optional[str] = Field(default=None)
    mongodb_cluster_host: str = Field(default="localhost:27017")

    mongodb_database: str = Field(default="SoulFinderDB")

    # Applied to server selection, connect and socket operations
    mongodb_timeout_ms: int = Field(default=10_000, ge=100, le=120_000)

    # ── Firebase ──────────────────────────────────────────────────────────
    # Service-account JSON used by firebase-admin to verify ID tokens
    firebase_credentials_path: str = Field(default="firebase-admin-key.json")

    # ── Stripe ────────────────────────────────────────────────────────────
    stripe_secret_key: str = Field(default="")
    payment_currency: str = Field(default="usd")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin
    cors_origins: str = Field(default="http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Upper bound for a single request, including store and provider calls
    request_timeout_seconds: float = Field(default=30.0, gt=0, le=300)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("payment_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Stripe expects lowercase three-letter ISO currency codes."""
        code = v.strip().lower()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"Invalid payment_currency '{v}'. Expected an ISO 4217 code like 'usd'.")
        return code

    @property
    def mongo_connection_uri(self) -> str:
        """
        What:  Resolves the MongoDB connection string.
        How:   MONGODB_URI wins; otherwise DB_USER/DB_PASS build a
               mongodb+srv URI against MONGODB_CLUSTER_HOST; otherwise a
               plain unauthenticated mongodb:// URI.
        """
        if self.mongodb_uri:
            return self.mongodb_uri
        if self.db_user and self.db_pass:
            return (
                f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
                f"@{self.mongodb_cluster_host}/?retryWrites=true&w=majority"
            )
        return f"mongodb://{self.mongodb_cluster_host}"

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that provider credentials are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every missing setting and raises one ValueError.
        """
        errors = []
        if not self.stripe_secret_key:
            errors.append("STRIPE_SECRET_KEY is not set; /create-payment-intent will fail.")
        if not self.mongodb_uri and not (self.db_user and self.db_pass):
            errors.append(
                "Neither MONGODB_URI nor DB_USER/DB_PASS is set; "
                f"connecting to mongodb://{self.mongodb_cluster_host} without credentials."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
