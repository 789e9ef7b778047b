from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "SITT - Simple Time Tracking"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True  # Set to False in production

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full
    database_statement_cache_size: int = 100
    run_migrations_on_startup: bool = False

    # Shutdown
    shutdown_grace_period: float = 10.0  # Seconds to wait for in-flight requests

    # Tracking
    max_projects: int = 15  # Per owner, admins are exempt
    project_write_attempts: int = 3  # Conditional project write attempts before giving up
    serialize_project_writes: bool = True  # In-process lock per project id

    # Owner bootstrap
    bootstrap_admin_name: str = "admin"
    bootstrap_admin_api_key: str | None = None  # If set, ensures an admin with this key exists

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("max_projects", "project_write_attempts")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("bootstrap_admin_api_key")
    @classmethod
    def validate_bootstrap_key(cls, v: str | None) -> str | None:
        if v is not None and len(v) != 32:
            raise ValueError("BOOTSTRAP_ADMIN_API_KEY must be exactly 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
