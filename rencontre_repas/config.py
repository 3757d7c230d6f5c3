"""Configuration management for the application."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./rencontreRepas.db")

    # Server
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=3000)
    static_dir: Path = Field(default=PACKAGE_DIR / "public")

    # Password hashing
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Content security policy allowlists
    csp_style_hosts: list[str] = Field(
        default=["https://www.gstatic.com", "https://fonts.googleapis.com"]
    )
    csp_script_hosts: list[str] = Field(
        default=["https://www.gstatic.com", "https://cdnjs.cloudflare.com"]
    )

    # Logging
    log_level: str = Field(default="INFO")

    environment: str = Field(default="development")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept log levels in any case."""
        return value.upper()

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has a real database."""
        if self.environment == "production" and self.database_url.startswith("sqlite"):
            raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def signup_form_path(self) -> Path:
        """Path of the HTML signup form served on the root route."""
        return self.static_dir / "signup.html"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
