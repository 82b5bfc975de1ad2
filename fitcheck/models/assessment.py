"""Assessment record model."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class AssessmentStatus(str, Enum):
    """Known assessment outcomes. The store does not enforce these."""

    PASSED = "passed"
    FLAGGED = "flagged"
    REJECTED = "rejected"


class Assessment(BaseModel):
    """One fitness-for-duty judgement for one worker and one captured image.

    Instances are frozen; the store replaces them on update.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    worker_id: str
    worker_name: str
    shift: str  # morning|afternoon|night
    image_data: str  # base64
    status: str
    confidence: float
    ai_analysis: dict[str, Any] | None = None
    criteria: dict[str, Any] | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime
