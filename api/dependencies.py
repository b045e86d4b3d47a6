"""FastAPI dependencies for dependency injection."""

from fastapi import Depends, Request

from agents.readiness.agent import FeedbackSynthesizer
from api.services.assessments import AssessmentService, AssessmentStore
from database.engine import AsyncSessionLocal


def get_assessment_store() -> AssessmentStore:
    """Store bound to the process-wide session factory."""
    return AssessmentStore(AsyncSessionLocal)


def get_feedback_synthesizer(request: Request) -> FeedbackSynthesizer:
    """Synthesizer built once during application startup."""
    return request.app.state.feedback_synthesizer


def get_assessment_service(
    store: AssessmentStore = Depends(get_assessment_store),
    synthesizer: FeedbackSynthesizer = Depends(get_feedback_synthesizer),
) -> AssessmentService:
    """Assessment orchestrator for one request."""
    return AssessmentService(store, synthesizer)
