"""Configuration management for the cycle metrics registry."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Registry configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CYCLE_METRICS_", case_sensitive=False, extra="ignore"
    )

    # Logging Configuration
    log_level: str = "INFO"

    # Cycle Configuration
    cycle_seconds: float = Field(default=1.0, gt=0)  # period between snapshot/rollover passes
    # Lower bound for the run duration used when averaging in the summary
    min_run_seconds: int = Field(default=1, ge=1)


# Global settings instance
settings = Settings()
