"""Health and metrics endpoints."""

from fastapi import APIRouter

from fitcheck.api.deps import SettingsDep, StoreDep

router = APIRouter()


@router.get("/health")
async def health(settings: SettingsDep):
    """Health check endpoint."""
    return {"status": "ok", "gemini_configured": settings.gemini_configured}


@router.get("/metrics")
async def metrics(store: StoreDep):
    """Basic metrics endpoint for observability."""
    return {"service": "fitcheck", "version": "0.1.0", "assessments": len(store)}
