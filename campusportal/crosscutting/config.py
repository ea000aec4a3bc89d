"""
Name: Portal Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables once, at startup
  - Surface missing secrets/endpoints as ConfigurationFatal

Collaborators:
  - api/main.py: reads settings in the lifespan and for CORS
  - container.py: picks repositories, storage and geocoding adapters
  - identity/sessions.py: session secret, TTL and cookie attributes

Constraints:
  - No business logic, pure configuration
  - Never read per request outside of get_settings() (cached)

Notes:
  - Singleton via lru_cache; tests call get_settings.cache_clear()
"""

from functools import lru_cache

from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationFatal

_MIN_PRODUCTION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """
    Portal settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: development | test | production
        session_secret: HMAC secret used to sign session tokens
        session_ttl_minutes: Lifetime of a session token/cookie
        password_min_length: Minimum length of a new password
        password_max_length: Maximum length of a new password
        login_path: Login entry point used for unauthenticated redirects
        storage_backend: local | webdav | s3
        max_upload_bytes: Largest accepted image upload
        gcp_api_key: Google Geocoding key (empty disables geocoding)
    """

    # Required (no defaults)
    database_url: str

    app_env: str = "development"
    log_level: str = "INFO"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = True

    # Sessions
    session_secret: str = ""
    session_ttl_minutes: int = 480
    session_cookie_name: str = "session_token"
    session_cookie_secure: bool = False
    login_path: str = "/auth/signin"

    # Passwords
    password_min_length: int = 8
    password_max_length: int = 512

    # Object storage
    storage_backend: str = "local"
    storage_local_root: str = "./data/storage"
    storage_url: str = ""
    storage_username: str = ""
    storage_password: str = ""
    s3_bucket: str = ""
    s3_access_key: str = ""
    s3_secret_key: str = ""
    s3_region: str = ""
    s3_endpoint_url: str = ""
    image_prefix: str = "image-upload"
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB

    # Geocoding
    gcp_api_key: str = ""
    geocoding_language: str = "de"
    geocoding_region: str = "de"
    geocoding_timeout_seconds: float = 5.0

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    @field_validator(
        "password_min_length", "password_max_length", "session_ttl_minutes"
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("storage_backend")
    @classmethod
    def storage_backend_must_be_known(cls, v: str) -> str:
        normalized = v.strip().lower()
        if normalized not in {"local", "webdav", "s3"}:
            raise ValueError("storage_backend must be one of: local, webdav, s3")
        return normalized

    @model_validator(mode="after")
    def validate_required_secrets(self):
        if not self.session_secret.strip():
            raise ValueError("SESSION_SECRET is required")
        if (
            self.is_production()
            and len(self.session_secret) < _MIN_PRODUCTION_SECRET_LENGTH
        ):
            raise ValueError(
                f"SESSION_SECRET must be at least {_MIN_PRODUCTION_SECRET_LENGTH} "
                "characters in production"
            )
        return self

    @model_validator(mode="after")
    def validate_storage_requirements(self):
        if self.storage_backend == "webdav" and not self.storage_url.strip():
            raise ValueError("STORAGE_URL is required when STORAGE_BACKEND=webdav")
        if self.storage_backend == "s3" and not (
            self.s3_bucket.strip()
            and self.s3_access_key.strip()
            and self.s3_secret_key.strip()
        ):
            raise ValueError(
                "S3_BUCKET, S3_ACCESS_KEY and S3_SECRET_KEY are required "
                "when STORAGE_BACKEND=s3"
            )
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() == "test"

    def geocoding_enabled(self) -> bool:
        return bool(self.gcp_api_key.strip())

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ConfigurationFatal: If required env vars are missing or invalid
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationFatal(
            f"Invalid configuration: {exc.error_count()} error(s)",
            original_error=exc,
        ) from exc
