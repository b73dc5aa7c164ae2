"""
Configuration management for the Sweet Shop API.

All process-wide settings (signing secret, database connection, CORS) live
on a single ``Settings`` object that is built once at process start and
handed to the application factory, which passes it on to the credential
service and the database layer.
"""

from functools import lru_cache
from typing import Annotated, List

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-secret-change-in-production"
VALID_ENVIRONMENTS = ("development", "staging", "production", "test")


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    The JWT secret has a development default so the API can be started
    locally without any setup. A production deployment refuses to start
    with that default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment Settings
    environment: str = "development"
    log_level: str = "INFO"

    # Database Configuration
    database_url: str = "sqlite:///./sweet_shop.db"
    log_sql_queries: bool = False
    create_tables_on_startup: bool = True

    # JWT Authentication - MUST be overridden in production
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = Field(default=24, gt=0)
    jwt_leeway_seconds: int = Field(default=0, ge=0)

    # Password hashing cost factor
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # CORS
    cors_origins: Annotated[List[str], NoDecode] = ["http://localhost:5173"]

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_ENVIRONMENTS:
            raise ValueError(f"ENVIRONMENT must be one of {list(VALID_ENVIRONMENTS)}")
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str, info: ValidationInfo) -> str:
        """Ensure JWT secret is not using default in production."""
        if info.data.get("environment") == "production" and (
            not v or v == DEFAULT_JWT_SECRET
        ):
            raise ValueError(
                "JWT_SECRET_KEY must be set to a secure value in production"
            )
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Only the process entrypoint should call this; everything else receives
    the instance it was constructed with.
    """
    return Settings()
