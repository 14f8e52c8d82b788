"""Diagnostic records of failover activity."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FailoverEvent(BaseModel):
    """Record of one failover decision."""

    timestamp: datetime = Field(default_factory=datetime.now, description="Event timestamp")
    path: str = Field(..., description="Request route that failed")
    from_endpoint: str = Field(..., description="Endpoint the failed attempt was sent to")
    to_endpoint: Optional[str] = Field(None, description="Endpoint chosen for the retry, None when final")
    failure_kind: str = Field(..., description="Classified failure kind")
    retries: int = Field(..., description="Retry counter after the decision")
    final: bool = Field(..., description="Whether the decision ended the failover sequence")
