"""Application settings and configuration.

This module defines all configuration options for the Hitboard service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Hitboard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Shared secret gating destructive operations; unset disables /reset entirely.
    admin_token: str | None = Field(default=None, alias="ADMIN_TOKEN")

    # Database configuration
    database_url: str = Field(default="sqlite:///./hitboard.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Ranking and pagination limits
    top_cap: int = Field(default=500, alias="TOP_CAP")
    top_limit_max: int = Field(default=50, alias="TOP_LIMIT_MAX")
    top_limit_default: int = Field(default=10, alias="TOP_LIMIT_DEFAULT")

    # Bulk lookup limits
    max_bulk_ids: int = Field(default=600, alias="MAX_BULK_IDS")
    bulk_chunk_size: int = Field(default=400, alias="BULK_CHUNK_SIZE")

    # Input bounds
    max_id_len: int = Field(default=300, alias="MAX_ID_LEN")
    max_title_len: int = Field(default=300, alias="MAX_TITLE_LEN")
    max_file_name_len: int = Field(default=260, alias="MAX_FILE_NAME_LEN")
    max_body_bytes: int = Field(default=256 * 1024, alias="MAX_BODY_BYTES")

    # HTTP surface
    api_prefix: str = Field(default="", alias="API_PREFIX")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["content-type", "x-admin-token"],
        alias="CORS_ALLOW_HEADERS",
    )
    cors_max_age: int = Field(default=86_400, alias="CORS_MAX_AGE")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()
