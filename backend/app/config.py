"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./habit_tracker.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Frontend ===
    frontend_settings_path: str = Field(
        default="/settings",
        description="Page the OAuth callback redirects the browser to"
    )

    # === Fitbit ===
    fitbit_client_id: Optional[str] = Field(default=None)
    fitbit_client_secret: Optional[str] = Field(default=None)
    fitbit_redirect_uri: Optional[str] = Field(
        default=None,
        description="Fixed OAuth redirect URI (derived from the request when unset)"
    )
    fitbit_required: bool = Field(
        default=False,
        description="Refuse to start when Fitbit credentials are missing"
    )
    fitbit_include_location_scope: bool = Field(default=True)
    fitbit_max_pages: int = Field(default=10, ge=1)

    # === Huawei Health Kit ===
    huawei_client_id: Optional[str] = Field(default=None)
    huawei_client_secret: Optional[str] = Field(default=None)

    # === Garmin Connect ===
    garmin_consumer_key: Optional[str] = Field(default=None)
    garmin_consumer_secret: Optional[str] = Field(default=None)

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
