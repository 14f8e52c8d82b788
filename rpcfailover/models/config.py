"""Configuration data models."""

from typing import Dict, List

from pydantic import BaseModel, Field, validator

from rpcfailover.utils.constants import (
    DEFAULT_MAX_EVENTS,
    DEFAULT_MODE,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TRANSPORT_TIMEOUT,
)


class FailoverConfig(BaseModel):
    """Failover provider configuration."""

    endpoints: List[str] = Field(default_factory=list, description="Ordered endpoint base addresses")
    mode: str = Field(default=DEFAULT_MODE, description="Failover mode (failover, fail_fast)")
    timeout: float = Field(default=DEFAULT_TRANSPORT_TIMEOUT, description="Request timeout in seconds")
    retry_delay: float = Field(default=DEFAULT_RETRY_DELAY, description="Delay before each retry in seconds")
    max_events: int = Field(default=DEFAULT_MAX_EVENTS, description="Failover events kept for diagnostics")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra HTTP headers")

    @validator("endpoints", pre=True)
    def split_endpoints(cls, v):
        """Accept a single address or a comma separated string."""
        if isinstance(v, str):
            return [part for part in v.split(",") if part.strip()]
        return v

    @validator("timeout")
    def validate_timeout(cls, v):
        """Timeout must be positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @validator("retry_delay")
    def validate_retry_delay(cls, v):
        """Retry delay cannot be negative."""
        if v < 0:
            raise ValueError("retry_delay cannot be negative")
        return v

    @validator("max_events")
    def validate_max_events(cls, v):
        if v < 0:
            raise ValueError("max_events cannot be negative")
        return v
