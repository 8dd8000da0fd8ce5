"""
Application settings and configuration management.

Uses pydantic-settings for validation and environment variable loading.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Alpha Vantage API
    alpha_vantage_api_key: str = Field(
        default="demo", description="Alpha Vantage API key"
    )
    alpha_vantage_base_url: str = Field(
        default="https://www.alphavantage.co/query",
        description="Alpha Vantage API base URL",
    )
    alpha_vantage_rate_limit: int = Field(
        default=75, ge=0, description="API calls per minute (0 disables throttling)"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Outbound HTTP timeout in seconds"
    )

    # Ranking
    risk_free_rate: float = Field(
        default=0.05, description="Annual risk-free rate for risk-adjusted scoring"
    )
    top_n: int = Field(default=20, ge=1, description="Contracts returned per group")
    default_strategy: str = Field(
        default="simple", description="Ranking strategy when none is requested"
    )
    max_concurrent_symbols: int = Field(
        default=1, ge=1, description="Symbols fetched in parallel (1 = sequential)"
    )
    exchange: str = Field(
        default="NYSE", description="Exchange calendar for the default as-of session"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(
        default="logs/optionrank.log", description="Log file path (empty disables)"
    )

    @property
    def min_request_interval(self) -> float:
        """Minimum seconds between outbound calls implied by the rate limit."""
        if self.alpha_vantage_rate_limit <= 0:
            return 0.0
        return 60.0 / self.alpha_vantage_rate_limit


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
