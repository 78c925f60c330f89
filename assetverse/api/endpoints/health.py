"""Root and health endpoints. No dependencies; used for liveness checks."""

from fastapi import APIRouter

from assetverse.core.config import get_settings
from assetverse.schemas.health import HealthResponse

router = APIRouter()


@router.get("/")
def root() -> dict[str, str]:
    """Service banner."""
    settings = get_settings()
    return {"message": f"{settings.app_name} API is running", "version": settings.app_version}


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)
