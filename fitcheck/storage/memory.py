"""In-memory assessment store.

Records live for the lifetime of the process. One store is built at
application start and injected into the request handlers.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any
from uuid import uuid4

from fitcheck.models import Assessment, AssessmentStatus
from fitcheck.schemas.assessment import AssessmentCreate

logger = logging.getLogger(__name__)

# Fields update() never touches.
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def _newest_first(assessments: Iterable[Assessment]) -> list[Assessment]:
    return sorted(assessments, key=lambda a: a.created_at, reverse=True)


class AssessmentStore:
    """Keyed collection of assessments with filtered, newest-first queries."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        # clock returns naive local time; "today" is relative to it
        self._clock = clock
        self._assessments: dict[str, Assessment] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        with self._lock:
            return len(self._assessments)

    def create(self, data: AssessmentCreate) -> Assessment:
        """Store a new assessment with a fresh id and creation time."""
        assessment = Assessment(
            **data.model_dump(),
            id=str(uuid4()),
            reviewed_by=None,
            reviewed_at=None,
            created_at=self._clock(),
        )
        with self._lock:
            self._assessments[assessment.id] = assessment
        logger.debug("Stored assessment %s status=%s", assessment.id, assessment.status)
        return assessment

    def get(self, assessment_id: str) -> Assessment | None:
        """Get assessment by ID."""
        with self._lock:
            return self._assessments.get(assessment_id)

    def list_all(self) -> list[Assessment]:
        """All assessments, newest first."""
        return self._filtered(lambda a: True)

    def update(self, assessment_id: str, changes: Mapping[str, Any]) -> Assessment | None:
        """
        Shallow-merge ``changes`` into the stored assessment.
        Returns None when the ID is unknown. id, created_at and unknown
        keys are ignored. Field types are validated (ValidationError), status
        values are not checked against the known ones.
        """
        fields = {
            k: v
            for k, v in changes.items()
            if k in Assessment.model_fields and k not in IMMUTABLE_FIELDS
        }
        with self._lock:
            existing = self._assessments.get(assessment_id)
            if existing is None:
                return None
            updated = Assessment.model_validate({**existing.model_dump(), **fields})
            self._assessments[assessment_id] = updated
        return updated

    def list_flagged(self) -> list[Assessment]:
        """Assessments awaiting review."""
        return self.list_by_status(AssessmentStatus.FLAGGED.value)

    def list_today(self) -> list[Assessment]:
        """Assessments created since local midnight."""
        midnight = self._clock().replace(hour=0, minute=0, second=0, microsecond=0)
        return self._filtered(lambda a: a.created_at >= midnight)

    def list_by_status(self, status: str) -> list[Assessment]:
        """Assessments whose status equals ``status`` exactly."""
        return self._filtered(lambda a: a.status == status)

    def _filtered(self, predicate: Callable[[Assessment], bool]) -> list[Assessment]:
        with self._lock:
            snapshot = list(self._assessments.values())
        return _newest_first(a for a in snapshot if predicate(a))
