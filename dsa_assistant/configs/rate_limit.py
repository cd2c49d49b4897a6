"""
Rate limiting configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Per-user admission control parameters
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitSettings(BaseSettings):
    """Sliding window rate limit configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RATE_LIMIT_",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Whether rate limiting is enforced")
    requests_per_minute: int = Field(
        default=10,
        gt=0,
        description="Maximum requests per user inside one window",
    )
    window_size_seconds: int = Field(default=60, gt=0, description="Sliding window length")
