"""Aggregate statistics over assessments."""

from collections.abc import Sequence

from fitcheck.models import Assessment, AssessmentStatus
from fitcheck.schemas.assessment import AssessmentStats


def compute_stats(assessments: Sequence[Assessment]) -> AssessmentStats:
    """
    Count per known status, mean confidence and pass rate (percent).
    Empty input yields zeros. Unrecognized statuses count toward total only.
    """
    total = len(assessments)
    counts = {s.value: 0 for s in AssessmentStatus}
    for a in assessments:
        if a.status in counts:
            counts[a.status] += 1

    passed = counts[AssessmentStatus.PASSED.value]
    avg_confidence = sum(a.confidence for a in assessments) / total if total else 0.0
    success_rate = passed / total * 100 if total else 0.0

    return AssessmentStats(
        total=total,
        passed=passed,
        flagged=counts[AssessmentStatus.FLAGGED.value],
        rejected=counts[AssessmentStatus.REJECTED.value],
        avg_confidence=avg_confidence,
        success_rate=success_rate,
    )
