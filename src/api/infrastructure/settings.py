"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly,
in particular the JWT signing secret and the database password.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        HOUSINGRAM_DB_HOST: Database host (default: localhost)
        HOUSINGRAM_DB_PORT: Database port (default: 5432)
        HOUSINGRAM_DB_DATABASE: Database name (default: housingram)
        HOUSINGRAM_DB_USERNAME: Database user (default: housingram)
        HOUSINGRAM_DB_PASSWORD: Database password (required in production)
        HOUSINGRAM_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        HOUSINGRAM_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOUSINGRAM_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="housingram", description="Database name")
    username: str = Field(default="housingram", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Token issuance and validation settings.

    Environment variables:
        HOUSINGRAM_AUTH_JWT_SECRET: HMAC signing secret (required in production)
        HOUSINGRAM_AUTH_JWT_ALGORITHM: Signing algorithm (default: HS256)
        HOUSINGRAM_AUTH_TOKEN_TTL_HOURS: Token lifetime in hours (default: 24)
        HOUSINGRAM_AUTH_ISSUER: Value of the iss claim (default: housingram)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOUSINGRAM_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        default=SecretStr("housingram-dev-secret-change-me"),
        description="Secret used to sign and verify access tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    token_ttl_hours: int = Field(
        default=24,
        description="Access token lifetime in hours",
        ge=1,
        le=24 * 30,
    )
    issuer: str = Field(default="housingram", description="Token issuer claim")


class TenancySettings(BaseSettings):
    """Settings for tenant-facing features.

    Environment variables:
        HOUSINGRAM_TENANCY_CURRENCY: Currency reported by platform statistics (default: USD)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOUSINGRAM_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    currency: str = Field(
        default="USD",
        description="Currency code for revenue statistics",
        min_length=3,
        max_length=3,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Housingram API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get authentication settings."""
        return get_auth_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached authentication settings."""
    return AuthSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()
