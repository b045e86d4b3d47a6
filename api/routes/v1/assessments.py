"""Career readiness assessment endpoints."""

import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from agents.readiness.tools import MCQ_QUESTIONS
from api.dependencies import get_assessment_service
from api.schemas.assessments import AssessmentFormSchema, AssessmentResponse, McqQuestion
from api.schemas.common import ErrorResponse
from api.services.assessments import (
    AssessmentPersistenceError,
    AssessmentService,
    AssessmentValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assessments", tags=["assessments"])


def _validation_response(exc: AssessmentValidationError) -> JSONResponse:
    content: Dict[str, Any] = {"message": exc.message}
    if exc.errors is not None:
        content["errors"] = exc.errors
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@router.post(
    "",
    response_model=AssessmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a self-assessment",
    description="Score a submission, generate feedback and store the report",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_assessment(
    payload: Any = Body(...),
    service: AssessmentService = Depends(get_assessment_service),
):
    """
    Create an assessment report.

    - **name**, **email**: identity
    - **role**: frontend, backend, fullstack or mobile
    - **experienceLevel**: intern, junior, mid or senior
    - **technicalSelfRating**, **communicationRating**: 1-10
    - **technicalMcqAnswer**: selected answer to the role question
    - **hasResume**, **hasPortfolio**: booleans, with optional **resumeText** and **portfolioUrl**
    """
    try:
        return await service.create(payload)
    except AssessmentValidationError as e:
        logger.info(f"Rejected assessment submission: {len(e.errors or [])} field errors")
        return _validation_response(e)
    except AssessmentPersistenceError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": e.message},
        )


@router.get(
    "/questions",
    response_model=Dict[str, McqQuestion],
    summary="Get role questions",
    description="Multiple-choice question and options shown for each role",
)
async def get_assessment_questions() -> Dict[str, McqQuestion]:
    """Role questions without their answers."""
    return MCQ_QUESTIONS


@router.get(
    "/form-schema",
    summary="Get submission schema",
    description="JSON Schema the submission endpoint validates against",
)
async def get_form_schema() -> Dict[str, Any]:
    """JSON Schema of the submission form, for client-side pre-checks."""
    return AssessmentFormSchema.model_json_schema(by_alias=True)


@router.get(
    "/{assessment_id}",
    response_model=AssessmentResponse,
    summary="Get assessment report",
    description="Retrieve a stored assessment by ID",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def get_assessment(
    assessment_id: str,
    service: AssessmentService = Depends(get_assessment_service),
):
    """Get a specific assessment."""
    try:
        record = await service.get(assessment_id)
    except AssessmentValidationError as e:
        return _validation_response(e)

    if record is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "Assessment not found"},
        )

    return record
