"""Health check endpoints."""

from fastapi import APIRouter

from parity import __version__
from parity.config import get_settings
from parity.curve.factory import get_curve_client

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "parity"}


@router.get("/health/detailed")
async def detailed_health():
    """Health check with redacted configuration and the active curve client."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "parity",
        "version": __version__,
        "curve_client": get_curve_client().name,
        "config": settings.get_safe_dict(),
    }
