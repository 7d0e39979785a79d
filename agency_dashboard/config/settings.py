"""
Agency Analytics Dashboard
Centralized Configuration Management

Pydantic settings with environment variable support, validation and type
safety. Every subsystem reads its configuration through ``get_settings()``.
"""

from functools import lru_cache
from typing import Optional, List
from pydantic import Field, field_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardSettings(BaseSettings):
    """Metrics and agency profit defaults"""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    default_profit_share: float = Field(default=50.0, ge=0, le=100, description="Profit share for new shops")
    metrics_default_filter: str = Field(default="today", description="Time filter for the KPI overview")
    chart_default_filter: str = Field(default="30d", description="Time filter for chart data")
    agency_default_filter: str = Field(default="mtd", description="Time filter for agency profit")


class SheetsSettings(BaseSettings):
    """Google Sheets Source Configuration"""

    model_config = SettingsConfigDict(env_prefix="GOOGLE_SHEETS_")

    api_key: Optional[SecretStr] = Field(default=None, description="Google Sheets API key")
    spreadsheet_id: Optional[str] = Field(default=None, description="Default spreadsheet id")
    sheet_name: str = Field(default="Sales Data", description="Default sheet/tab name")
    base_url: str = Field(default="https://sheets.googleapis.com/v4", description="Sheets API base URL")
    timeout_seconds: float = Field(default=30.0, description="HTTP timeout in seconds")


class SecuritySettings(BaseSettings):
    """Security and Request Limiting Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    # Rate limiting
    rate_limit_requests: int = Field(default=100, alias="RATE_LIMIT_REQUESTS", description="Rate limit requests")
    rate_limit_window_seconds: int = Field(default=60, alias="RATE_LIMIT_WINDOW_SECONDS", description="Rate limit window")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins"
    )


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", alias="LOG_FORMAT", description="Log format: json or text")


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
    )

    # Application
    app_name: str = Field(default="agency-dashboard", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", alias="API_HOST", description="API host")
    api_port: int = Field(default=8000, alias="API_PORT", description="API port")
    api_workers: int = Field(default=1, alias="API_WORKERS", description="API workers (store is per-process)")
    api_reload: bool = Field(default=False, alias="API_RELOAD", description="Enable reload")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Store behaviour
    seed_sample_data: bool = Field(default=True, alias="SEED_SAMPLE_DATA", description="Seed demo shops at startup")
    cascade_shop_delete: bool = Field(
        default=True,
        alias="CASCADE_SHOP_DELETE",
        description="Delete a shop's metric records together with the shop",
    )

    # Subsystem configurations
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    sheets: SheetsSettings = Field(default_factory=SheetsSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.app_env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
