"""Application configuration using pydantic-settings."""
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # Application Configuration
    app_env: str = Field(default="development", description="Application environment (development/staging/production)")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=True, description="Enable debug mode")

    # Real-time metrics polling
    poll_interval_ms: int = Field(default=5000, gt=0, description="Polling cadence for dashboard metrics in milliseconds")
    fetch_latency_min_ms: int = Field(default=100, ge=0, description="Lower bound of simulated API latency")
    fetch_latency_max_ms: int = Field(default=300, ge=0, description="Upper bound of simulated API latency")
    fetch_failure_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Probability that a simulated metrics fetch fails",
    )
    random_seed: Optional[int] = Field(default=None, description="Seed for the metrics simulation (None = nondeterministic)")
    currency: str = Field(default="USD", min_length=3, max_length=3, description="Display currency for revenue figures")

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )

    # Observability
    tracing_enabled: bool = Field(default=False, description="Export OpenTelemetry traces")
    otel_service_name: str = Field(default="insights-api", description="OpenTelemetry service name")
    otel_exporter_otlp_endpoint: str = Field(
        default="http://localhost:4318",
        description="OTLP exporter endpoint",
    )

    # Report branding
    company_name: str = Field(default="ADmyBRAND Insights", description="Company name for exported reports")
    brand_primary_color: str = Field(default="#000000", description="Primary brand color")

    @field_validator("log_level", mode="after")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        x = (v or "INFO").upper()
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
        if x not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(valid)}")
        return x

    @model_validator(mode="after")
    def _check_latency_window(self) -> "Settings":
        if self.fetch_latency_max_ms < self.fetch_latency_min_ms:
            raise ValueError("FETCH_LATENCY_MAX_MS must be >= FETCH_LATENCY_MIN_MS")
        return self


# Global settings instance
settings = Settings()
