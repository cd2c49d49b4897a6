"""
Rate limit domain models.

Dependencies: pydantic
System role: Admission decision returned by the rate limiter
"""

from pydantic import BaseModel, ConfigDict, Field


class RateLimitInfo(BaseModel):
    """Outcome of a rate limit check for one user."""

    model_config = ConfigDict(frozen=True)

    allowed: bool = Field(description="Whether the request is admitted")
    remaining_requests: int = Field(ge=0, description="Requests left in the current window")
    reset_time_seconds: int = Field(ge=0, description="Seconds until the oldest request leaves the window")
    limit: int = Field(description="Maximum requests per window")
