"""Health endpoint."""

from fastapi import APIRouter

from view_layer import __version__
from view_layer.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, name="health")
async def health_check():
    """Basic health check endpoint."""
    return HealthResponse(status="ok", version=__version__)
