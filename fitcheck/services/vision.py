"""
Vision judgement collaborator.

Sends a worker selfie to Gemini and parses the structured fitness-for-duty
judgement. Any failure surfaces as AnalysisError; nothing is retried.
"""

import base64
import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from fitcheck.config import Settings
from fitcheck.schemas.analysis import RESPONSE_SCHEMA, SafetyAnalysis

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a workplace safety AI specialist analyzing worker selfies for fitness for duty assessment.

Your task is to evaluate whether a worker appears to be under the influence of alcohol or substances that would make them unsafe to work.

Analyze the image for the following safety indicators:
1. Eye Movement & Focus - Look for bloodshot eyes, unusual dilation, difficulty focusing, or glazed appearance
2. Facial Expression - Check for signs of confusion, disorientation, or altered mental state
3. Head Position - Assess stability, ability to hold head steady, signs of swaying or instability
4. Skin Color Analysis - Look for flushing, pallor, or other color changes that might indicate impairment

Provide a comprehensive safety assessment with:
- Overall status: "passed" or "flagged"
- Confidence score (0-100)
- Individual criteria scores and status
- List of any detected issues
- Risk level assessment
- Recommendations

Be thorough but fair in your assessment. Only flag cases where there are clear indicators of potential impairment that could affect workplace safety.

Respond with JSON matching the provided response schema."""

USER_PROMPT = (
    "Analyze this worker selfie for workplace safety compliance "
    "and fitness for duty assessment."
)


class AnalysisError(Exception):
    """Raised when the vision model cannot produce a judgement."""

    def __init__(self, message: str, reason: str = "upstream_error"):
        super().__init__(message)
        self.reason = reason


class SafetyAnalyzer(Protocol):
    """Anything that maps image bytes to a SafetyAnalysis."""

    async def analyze(self, image: bytes, mime_type: str = "image/jpeg") -> SafetyAnalysis:
        ...


class GeminiSafetyAnalyzer:
    """SafetyAnalyzer backed by the Gemini generateContent REST endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-pro",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_seconds: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient | None = None
    ) -> "GeminiSafetyAnalyzer":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout_seconds=settings.gemini_timeout_seconds,
            client=client,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _build_request_body(self, image: bytes, mime_type: str) -> dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {
                            "inlineData": {
                                "mimeType": mime_type,
                                "data": base64.b64encode(image).decode("ascii"),
                            }
                        },
                        {"text": USER_PROMPT},
                    ],
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        if resp.is_success:
            return
        body = resp.text
        if resp.status_code == 429 or "quota" in body.lower():
            raise AnalysisError(
                "Gemini API quota exceeded. Please check your API usage limits.",
                reason="quota_exceeded",
            )
        if resp.status_code == 403:
            raise AnalysisError(
                "Gemini API permission denied. Please verify your API key has the required permissions.",
                reason="permission_denied",
            )
        if resp.status_code in (400, 401) and "api key" in body.lower():
            raise AnalysisError(
                "Gemini API key is invalid or not configured. Please check your API key configuration.",
                reason="invalid_key",
            )
        raise AnalysisError(
            f"Workplace safety analysis failed: HTTP {resp.status_code}",
            reason="upstream_error",
        )

    @staticmethod
    def _extract_text(payload: Any) -> str:
        """Concatenate text parts of the first candidate."""
        if not isinstance(payload, dict):
            return ""
        candidates = payload.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts if isinstance(p, dict))

    async def analyze(self, image: bytes, mime_type: str = "image/jpeg") -> SafetyAnalysis:
        """Judge one image. Raises AnalysisError on any failure."""
        if not self.api_key:
            raise AnalysisError(
                "Gemini API key is not configured. Please set GEMINI_API_KEY environment variable.",
                reason="not_configured",
            )

        try:
            resp = await self._client.post(
                self.endpoint,
                json=self._build_request_body(image, mime_type),
                headers={"x-goog-api-key": self.api_key},
            )
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise AnalysisError(
                f"Workplace safety analysis failed: {e.__class__.__name__}",
                reason="upstream_error",
            ) from e

        self._raise_for_status(resp)

        try:
            raw_json = self._extract_text(resp.json())
        except ValueError as e:
            raise AnalysisError(
                "Invalid JSON response from Gemini AI model", reason="invalid_response"
            ) from e
        if not raw_json:
            raise AnalysisError("Empty response from Gemini AI model", reason="invalid_response")

        logger.info("Gemini analysis result: %s", raw_json)

        try:
            return SafetyAnalysis.model_validate_json(raw_json)
        except ValidationError as e:
            logger.error("Failed to parse Gemini response: %s", e)
            raise AnalysisError(
                "Invalid JSON response from Gemini AI model", reason="invalid_response"
            ) from e
