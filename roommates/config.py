"""Configuration management with pydantic-settings and validation."""

from pydantic_settings import BaseSettings
from pydantic import field_validator


# Fields that may be left unset (they carry defaults)
OPTIONAL_FIELDS = {
    "app_name",
    "min_compatibility_score",
    "log_level",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str

    # Matching
    min_compatibility_score: int = 50

    # Application
    app_name: str = "Roommate Matcher"
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_url(cls, v):
        """Heroku-style URLs use postgres:// but SQLAlchemy requires postgresql://."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator("min_compatibility_score")
    @classmethod
    def check_score_range(cls, v):
        if not 0 <= v <= 100:
            raise ValueError("min_compatibility_score must be between 0 and 100")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v):
        return v.strip().upper() or "INFO"

    @field_validator("*", mode="before")
    @classmethod
    def check_not_empty(cls, v, info):
        """Validate that required environment variables are not empty."""
        if info.field_name in OPTIONAL_FIELDS:
            return v
        if v is None:
            raise ValueError("Required environment variable is not set")
        if isinstance(v, str) and v.strip() == "":
            raise ValueError("Required environment variable is empty")
        return v


def get_settings() -> Settings:
    """Load and validate settings from environment.

    Raises:
        ValidationError: If required environment variables are missing or invalid.
    """
    return Settings()
