"""Shared response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Error envelope shared by every failing endpoint."""

    error: str
    message: str
    details: str | None = None


class HealthStatus(BaseModel):
    """Liveness and upstream connectivity report."""

    status: str = "OK"
    timestamp: datetime
    server: str
    provider: str
    apis: dict[str, str] = Field(default_factory=dict)
