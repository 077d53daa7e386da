"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars (and an optional
.env file in the working directory). Variable names are unprefixed:
PORT, DB_HOST, API_DUMMY_TOKEN, ...

Learn: The database URL is either given whole (DATABASE_URL) or
assembled from the DB_* parts, so the same image can point at a
managed database or a local one without code changes.
"""

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """All app configuration."""

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    api_prefix: str = "/api"

    # Database
    database_url: str = ""
    # DB_* names, or the MYSQL_* names older deployments use
    db_host: str = Field(
        default="localhost",
        validation_alias=AliasChoices("DB_HOST", "MYSQL_HOST", "db_host"),
    )
    db_port: int = Field(
        default=5432,
        validation_alias=AliasChoices("DB_PORT", "MYSQL_PORT", "db_port"),
    )
    db_user: str = Field(
        default="keyportal",
        validation_alias=AliasChoices("DB_USER", "MYSQL_USER", "db_user"),
    )
    db_password: str = Field(
        default="",
        validation_alias=AliasChoices("DB_PASSWORD", "MYSQL_PASSWORD", "db_password"),
    )
    db_name: str = Field(
        default="keyportal",
        validation_alias=AliasChoices("DB_NAME", "MYSQL_DATABASE", "db_name"),
    )
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Auth: single shared admin bearer token
    admin_token: str = Field(
        default="",
        validation_alias=AliasChoices("API_DUMMY_TOKEN", "ADMIN_TOKEN", "admin_token"),
    )

    # API keys
    api_key_expire_days: int = 30

    # CORS
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Refuse to run outside development without an admin token."""
        if self.environment != "development" and not self.admin_token:
            raise ValueError(
                "API_DUMMY_TOKEN must be set in non-development environments. "
                'Generate one with: python -c "import secrets; '
                'print(secrets.token_hex(32))"'
            )
        if self.api_key_expire_days < 1:
            raise ValueError("API_KEY_EXPIRE_DAYS must be at least 1")
        return self

    @property
    def sqlalchemy_url(self) -> str:
        """Resolved async connection URL."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    @property
    def prefix(self) -> str:
        """API prefix normalised to '/x' form ('' for root)."""
        stripped = self.api_prefix.strip("/")
        return f"/{stripped}" if stripped else ""


# Singleton: used by the CLI and the default app instance
settings = Settings()
