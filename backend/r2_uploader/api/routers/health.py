from fastapi import APIRouter, Depends

from r2_uploader.core.config import Settings, get_settings
from r2_uploader.schemas import HealthResponse
from r2_uploader.services.health import build_health_report

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Liveness probe; reports which settings are configured, never their values."""
    return build_health_report(settings)
