"""Assessment request/response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class AssessmentCreate(BaseModel):
    """Fields the caller supplies when creating an assessment."""

    worker_id: str
    worker_name: str
    shift: str
    image_data: str
    status: str
    confidence: float
    ai_analysis: dict[str, Any] | None = None
    criteria: dict[str, Any] | None = None


class AssessmentUpdate(BaseModel):
    """PATCH /api/assessments/{id} request - partial, shallow merge.

    Reviewers normally send status, reviewed_by and reviewed_at only.
    Status is not restricted to the known values.
    """

    model_config = ConfigDict(extra="forbid")

    worker_id: str | None = None
    worker_name: str | None = None
    shift: str | None = None
    image_data: str | None = None
    status: str | None = None
    confidence: float | None = None
    ai_analysis: dict[str, Any] | None = None
    criteria: dict[str, Any] | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None

    @field_validator(
        "worker_id", "worker_name", "shift", "image_data", "status", "confidence", mode="before"
    )
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Required record fields may be omitted but not cleared."""
        if v is None:
            raise ValueError("field cannot be null")
        return v


class AssessmentStats(BaseModel):
    """GET /api/stats/today response."""

    total: int
    passed: int
    flagged: int
    rejected: int
    avg_confidence: float
    success_rate: float
