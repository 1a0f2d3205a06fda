"""Retry configuration for repository operations."""

from pydantic import BaseModel, ConfigDict, Field


class RetryConfig(BaseModel):
    """Bounded exponential backoff for retryable procedure outcomes."""

    model_config = ConfigDict(extra="forbid")

    max_attempts: int = Field(default=3, ge=1, description="Attempts including the first one")
    delay_secs: float = Field(default=0.1, ge=0, description="Delay before the first retry")
    backoff_multiplier: float = Field(default=2.0, ge=1, description="Delay multiplier per retry")
