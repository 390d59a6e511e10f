"""
Retail Seed
Centralized Configuration Management

Configuration management using Pydantic settings with environment variable
support, validation, and type safety.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """PostgreSQL Database Configuration"""

    model_config = SettingsConfigDict(env_prefix="POSTGRES_", populate_by_name=True)

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    db: str = Field(default="retail_management", description="Database name")
    user: str = Field(default="retail", description="Database user")
    password: SecretStr = Field(default=SecretStr("secure_password"), description="Database password")
    echo: bool = Field(default=False, description="Echo SQL queries")
    url: Optional[str] = Field(default=None, alias="DATABASE_URL", description="Database URL (overrides host/port)")

    @property
    def async_url(self) -> str:
        """Async database URL - uses DATABASE_URL if set, otherwise builds one for asyncpg"""
        if self.url:
            return self.url
        return f"postgresql+asyncpg://{self.user}:{self.password.get_secret_value()}@{self.host}:{self.port}/{self.db}"


class SeedSettings(BaseSettings):
    """Seeding Pipeline Configuration"""

    model_config = SettingsConfigDict(env_prefix="SEED_")

    profile: str = Field(default="full", description="Dataset profile: full or minimal")
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor for seeded user passwords")
    inventory_min: int = Field(default=10, description="Lowest seeded quantity on hand (inclusive)")
    inventory_max: int = Field(default=60, description="Highest seeded quantity on hand (exclusive)")
    random_seed: Optional[int] = Field(default=None, description="Seed for inventory quantities")

    @field_validator("profile")
    @classmethod
    def validate_profile(cls, v: str) -> str:
        """Validate profile name"""
        allowed = ["full", "minimal"]
        if v.lower() not in allowed:
            raise ValueError(f"Profile must be one of: {allowed}")
        return v.lower()

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_rounds(cls, v: int) -> int:
        """bcrypt accepts cost factors 4 through 31"""
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    @model_validator(mode="after")
    def validate_inventory_range(self) -> "SeedSettings":
        """Quantity range must be non-negative and non-empty"""
        if self.inventory_min < 0 or self.inventory_max <= self.inventory_min:
            raise ValueError("inventory range must satisfy 0 <= inventory_min < inventory_max")
        return self


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="", populate_by_name=True)

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="text", alias="LOG_FORMAT", description="Log format: json or text")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="retail-seed", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")

    # Subsystem configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    seed: SeedSettings = Field(default_factory=SeedSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
