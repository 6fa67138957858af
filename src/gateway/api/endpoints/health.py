"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter

from gateway.core.config import settings
from gateway.core.deps import Provider
from gateway.schemas.common import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(provider: Provider) -> HealthStatus:
    """Report liveness and probe upstream connectivity.

    Probe failures are reported in ``apis`` and never fail the check.
    """
    return HealthStatus(
        status="OK",
        timestamp=datetime.now(UTC),
        server=f"{settings.app_name} {settings.app_version}",
        provider=provider.name,
        apis=await provider.probe(),
    )
