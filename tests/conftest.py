"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta

import pytest

from fitcheck.schemas.analysis import SafetyAnalysis
from fitcheck.schemas.assessment import AssessmentCreate
from fitcheck.services.vision import AnalysisError
from fitcheck.storage.memory import AssessmentStore

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 64


class FakeClock:
    """Settable stand-in for datetime.now."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeAnalyzer:
    """Returns a canned analysis, or raises the configured error."""

    def __init__(self, analysis: SafetyAnalysis | None = None, error: AnalysisError | None = None):
        self.analysis = analysis or make_analysis()
        self.error = error
        self.calls: list[tuple[bytes, str]] = []

    async def analyze(self, image: bytes, mime_type: str = "image/jpeg") -> SafetyAnalysis:
        self.calls.append((image, mime_type))
        if self.error:
            raise self.error
        return self.analysis


def make_analysis(status: str = "passed", confidence: float = 92.0) -> SafetyAnalysis:
    """Analysis as the model would return it (camelCase JSON)."""
    abnormal = status == "flagged"
    return SafetyAnalysis.model_validate(
        {
            "overallStatus": status,
            "confidence": confidence,
            "criteria": {
                "eyeMovement": {"score": 40 if abnormal else 95, "status": "abnormal" if abnormal else "normal"},
                "facialExpression": {"score": 90, "status": "normal"},
                "headPosition": {"score": 88, "status": "stable"},
                "skinColor": {"score": 91, "status": "normal"},
            },
            "detectedIssues": ["bloodshot eyes"] if abnormal else [],
            "riskLevel": "high" if abnormal else "low",
            "recommendations": ["Supervisor review"] if abnormal else [],
        }
    )


def make_create(**overrides) -> AssessmentCreate:
    """Baseline passed assessment, then override specific fields."""
    fields = {
        "worker_id": "W-001",
        "worker_name": "Alex Doe",
        "shift": "morning",
        "image_data": "aGVsbG8=",
        "status": "passed",
        "confidence": 90.0,
        "ai_analysis": {"overall_status": "passed"},
        "criteria": {"eye_movement": {"score": 95, "status": "normal"}},
    }
    fields.update(overrides)
    return AssessmentCreate(**fields)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 9, 0, 0))


@pytest.fixture
def store(clock: FakeClock) -> AssessmentStore:
    return AssessmentStore(clock=clock)
