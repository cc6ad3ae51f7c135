# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# One frozen Settings object, read from the environment (and an optional
# .env file in the working directory) by pydantic-settings.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   app = create_app(settings)
#
# The Settings object is built once at startup and handed to the components
# that need it (database client, auth gate, AI agent). Nothing reads the
# environment after that.
# =============================================================================

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_JWT_SECRET_LENGTH = 16


class Settings(BaseSettings):
    """
    Every tunable the API reads at startup.

    Required: SUPABASE_URL, SUPABASE_SERVICE_KEY, OPENAI_API_KEY, JWT_SECRET.
    Everything else has a development-friendly default.

    Instances are frozen: assigning to a field raises a ValidationError.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,  # ... means required (no default)
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: SecretStr = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    DB_CONNECT_ATTEMPTS: int = Field(
        default=5,
        ge=1,
        le=20,
        description="How many times to try reaching the database at startup"
    )

    DB_CONNECT_BACKOFF_SECONDS: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Initial wait between database connection attempts (doubles each retry)"
    )

    # -------------------------------------------------------------------------
    # OpenAI / LLM Configuration
    # -------------------------------------------------------------------------
    # Required for the AI endpoints

    OPENAI_API_KEY: SecretStr = Field(
        ...,
        description="OpenAI API key for the interview coach"
    )

    OPENAI_MODEL: str = Field(
        default="gpt-4o-mini",
        description="Model used for generation (must support JSON mode)"
    )

    AI_TEMPERATURE: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="OpenAI temperature for question generation"
    )

    AI_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        gt=0.0,
        le=300.0,
        description="Per-request timeout for the OpenAI API"
    )

    AI_MAX_RETRIES: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries the OpenAI SDK performs (with backoff) before giving up"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    JWT_SECRET: SecretStr = Field(
        ...,
        description="Secret key for signing access tokens (at least 16 characters)"
    )

    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="HMAC algorithm used to sign access tokens"
    )

    JWT_EXPIRE_DAYS: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Access token lifetime in days"
    )

    AUTH_COOKIE_NAME: str = Field(
        default="token",
        min_length=1,
        description="Cookie that carries the access token"
    )

    COOKIE_SECURE: bool | None = Field(
        default=None,
        description="Force the Secure cookie flag (defaults to on in production)"
    )

    # Frontend origin(s) allowed to make credentialed requests (comma-separated)
    FRONTEND_URL: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty env vars as unset so defaults apply
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("JWT_SECRET")
    @classmethod
    def secret_long_enough(cls, value: SecretStr) -> SecretStr:
        if len(value.get_secret_value()) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(f"JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters")
        return value

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse FRONTEND_URL into a list of origins.

        Handles comma-separated values, strips whitespace and trailing slashes.
        Example: "http://localhost:5173, https://app.example.com/" ->
            ["http://localhost:5173", "https://app.example.com"]
        """
        return [
            origin.strip().rstrip("/")
            for origin in self.FRONTEND_URL.split(",")
            if origin.strip()
        ]

    @property
    def jwt_expire_delta(self) -> timedelta:
        """Access token lifetime as a timedelta."""
        return timedelta(days=self.JWT_EXPIRE_DAYS)

    @property
    def cookie_secure(self) -> bool:
        """Whether the auth cookie carries the Secure flag."""
        if self.COOKIE_SECURE is not None:
            return self.COOKIE_SECURE
        return self.is_production

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Build the process-wide Settings from the environment.

    Cached, so the module-level app and the console script share one
    instance. Tests build their own Settings and pass it to create_app().
    """
    return Settings()
