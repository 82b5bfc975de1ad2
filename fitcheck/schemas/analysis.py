"""Vision judgement schemas.

The model answers in camelCase JSON (``overallStatus``, ``eyeMovement``);
fields are snake_case in Python and accept either spelling on input.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CriterionScore(_CamelModel):
    """Score for one safety indicator."""

    score: float
    status: str  # normal|abnormal, or stable|unstable for head position


class SafetyCriteria(_CamelModel):
    """Per-indicator scores."""

    eye_movement: CriterionScore
    facial_expression: CriterionScore
    head_position: CriterionScore
    skin_color: CriterionScore


class SafetyAnalysis(_CamelModel):
    """Structured fitness-for-duty judgement for one image."""

    overall_status: Literal["passed", "flagged"]
    confidence: float
    criteria: SafetyCriteria
    detected_issues: list[str] = Field(default_factory=list)
    risk_level: Literal["low", "medium", "high"]
    recommendations: list[str] = Field(default_factory=list)

    @field_validator("confidence", mode="after")
    @classmethod
    def clamp_confidence(cls, v: float) -> float:
        """Keep confidence within 0-100."""
        return max(0.0, min(100.0, v))


# JSON schema handed to the model as responseSchema.
RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "overallStatus": {"type": "string", "enum": ["passed", "flagged"]},
        "confidence": {"type": "number", "minimum": 0, "maximum": 100},
        "criteria": {
            "type": "object",
            "properties": {
                "eyeMovement": {
                    "type": "object",
                    "properties": {
                        "score": {"type": "number"},
                        "status": {"type": "string", "enum": ["normal", "abnormal"]},
                    },
                    "required": ["score", "status"],
                },
                "facialExpression": {
                    "type": "object",
                    "properties": {
                        "score": {"type": "number"},
                        "status": {"type": "string", "enum": ["normal", "abnormal"]},
                    },
                    "required": ["score", "status"],
                },
                "headPosition": {
                    "type": "object",
                    "properties": {
                        "score": {"type": "number"},
                        "status": {"type": "string", "enum": ["stable", "unstable"]},
                    },
                    "required": ["score", "status"],
                },
                "skinColor": {
                    "type": "object",
                    "properties": {
                        "score": {"type": "number"},
                        "status": {"type": "string", "enum": ["normal", "abnormal"]},
                    },
                    "required": ["score", "status"],
                },
            },
            "required": ["eyeMovement", "facialExpression", "headPosition", "skinColor"],
        },
        "detectedIssues": {"type": "array", "items": {"type": "string"}},
        "riskLevel": {"type": "string", "enum": ["low", "medium", "high"]},
        "recommendations": {"type": "array", "items": {"type": "string"}},
    },
    "required": [
        "overallStatus",
        "confidence",
        "criteria",
        "detectedIssues",
        "riskLevel",
        "recommendations",
    ],
}
