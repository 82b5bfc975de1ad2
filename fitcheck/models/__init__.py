"""Domain models."""

from fitcheck.models.assessment import Assessment, AssessmentStatus

__all__ = ["Assessment", "AssessmentStatus"]
