"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY, Firestore credentials)
are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key, and Firestore credentials when the
    firestore backend is selected).
    """

    # App
    app_name: str = "assetverse"
    app_version: str = "1.0.0"
    debug: bool = False
    api_prefix: str = ""

    # Document store: "firestore" (Firestore REST) or "memory" (process-local, dev/tests)
    database_backend: str = "firestore"
    # Conditional commits retried this many times on a version conflict before 409.
    store_write_max_attempts: int = 3

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:5173,http://localhost:3000"

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    # Subscription
    # Employees an HR account may affiliate before upgrading; also the base added on upgrade.
    base_package_limit: int = 5
    seed_packages_on_startup: bool = True

    # Payments (Stripe Checkout over REST)
    stripe_secret_key: SecretStr | None = None
    stripe_api_base: str = "https://api.stripe.com/v1"
    stripe_timeout_seconds: float = 15.0
    payment_currency: str = "usd"
    client_url: str = "http://localhost:5173"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and store backend.

        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - Memory: nothing else required (data lives only as long as the process).
        """
        if self.database_backend == "firestore":
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When database_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'firestore' or 'memory', got: {self.database_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.store_write_max_attempts < 1:
            raise ValueError("STORE_WRITE_MAX_ATTEMPTS must be at least 1")
        if self.base_package_limit < 0:
            raise ValueError("BASE_PACKAGE_LIMIT must not be negative")
        return self

    @property
    def stripe_configured(self) -> bool:
        return bool(
            self.stripe_secret_key and self.stripe_secret_key.get_secret_value()
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
