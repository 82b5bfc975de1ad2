"""Statistics endpoints."""

from fastapi import APIRouter

from fitcheck.api.deps import StoreDep
from fitcheck.engine.stats import compute_stats
from fitcheck.schemas.assessment import AssessmentStats

router = APIRouter()


@router.get("/stats/today", response_model=AssessmentStats)
async def today_stats(store: StoreDep):
    """Counts, mean confidence and pass rate for assessments created today."""
    return compute_stats(store.list_today())
