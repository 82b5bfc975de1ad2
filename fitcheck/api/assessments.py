"""Assessment endpoints."""

import base64
import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from fitcheck.api.deps import AnalyzerDep, SettingsDep, StoreDep
from fitcheck.models import Assessment
from fitcheck.schemas.assessment import AssessmentCreate, AssessmentUpdate
from fitcheck.services.vision import AnalysisError
from fitcheck.utils.image import ImageValidationError, validate_image

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/assessments", response_model=Assessment)
async def create_assessment(
    store: StoreDep,
    analyzer: AnalyzerDep,
    settings: SettingsDep,
    image: Annotated[UploadFile | None, File()] = None,
    worker_id: Annotated[str, Form()] = "",
    worker_name: Annotated[str, Form()] = "",
    shift: Annotated[str, Form()] = "",
):
    """
    Analyze an uploaded selfie and store the resulting assessment.
    Nothing is stored when the analysis fails.
    """
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image file is required",
        )
    if not worker_id.strip() or not worker_name.strip() or not shift.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Worker ID, name, and shift are required",
        )

    # read one byte past the limit so oversize uploads are caught without buffering them
    data = await image.read(settings.max_image_bytes + 1)
    try:
        mime_type = validate_image(data, settings.max_image_bytes)
    except ImageValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        analysis = await analyzer.analyze(data, mime_type)
    except AnalysisError as e:
        logger.error("Analysis failed for worker %s (%s): %s", worker_id, e.reason, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"AI analysis failed ({e.reason}): {e}",
        )

    assessment = store.create(
        AssessmentCreate(
            worker_id=worker_id,
            worker_name=worker_name,
            shift=shift,
            image_data=base64.b64encode(data).decode("ascii"),
            status=analysis.overall_status,
            confidence=analysis.confidence,
            ai_analysis=analysis.model_dump(),
            criteria=analysis.criteria.model_dump(),
        )
    )
    logger.info(
        "Assessment %s created for worker %s: %s (%.1f)",
        assessment.id,
        worker_id,
        assessment.status,
        assessment.confidence,
    )
    return assessment


@router.get("/assessments", response_model=list[Assessment])
async def list_assessments(store: StoreDep, status: str | None = None):
    """All assessments newest first, optionally narrowed to one status."""
    if status is not None:
        return store.list_by_status(status)
    return store.list_all()


@router.get("/assessments/status/flagged", response_model=list[Assessment])
async def list_flagged_assessments(store: StoreDep):
    """Assessments awaiting review."""
    return store.list_flagged()


@router.get("/assessments/status/{assessment_status}", response_model=list[Assessment])
async def list_assessments_by_status(assessment_status: str, store: StoreDep):
    return store.list_by_status(assessment_status)


@router.get("/assessments/{assessment_id}", response_model=Assessment)
async def get_assessment(assessment_id: str, store: StoreDep):
    """Get assessment by ID."""
    assessment = store.get(assessment_id)
    if not assessment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assessment not found",
        )
    return assessment


@router.patch("/assessments/{assessment_id}", response_model=Assessment)
async def update_assessment(assessment_id: str, body: AssessmentUpdate, store: StoreDep):
    """Reviewer action - merges the supplied fields into the assessment."""
    assessment = store.update(assessment_id, body.model_dump(exclude_unset=True))
    if not assessment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assessment not found",
        )
    logger.info(
        "Assessment %s updated by %s: status=%s",
        assessment_id,
        assessment.reviewed_by or "unknown",
        assessment.status,
    )
    return assessment
