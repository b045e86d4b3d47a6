"""
API Services Layer.

Direct database operations for API endpoints,
separate from AI agent tools.
"""

from api.services.assessments import (
    AssessmentError,
    AssessmentPersistenceError,
    AssessmentService,
    AssessmentStore,
    AssessmentValidationError,
    assemble_assessment,
    parse_assessment_id,
)

__all__ = [
    "AssessmentError",
    "AssessmentPersistenceError",
    "AssessmentService",
    "AssessmentStore",
    "AssessmentValidationError",
    "assemble_assessment",
    "parse_assessment_id",
]
