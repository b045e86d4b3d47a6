"""Assessment service functions.

Sequences one submission through scoring, feedback, assembly and storage, and
serves the append-only read path.
"""

import logging
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agents.readiness.agent import FeedbackResult, FeedbackSynthesizer
from agents.readiness.tools import RubricResult, evaluate_readiness
from api.schemas.assessments import AssessmentFormSchema, AssessmentRecord
from core.middleware.error_handling import format_validation_errors
from database.models.assessments import Assessment

logger = logging.getLogger(__name__)

# Column values for a new row, everything except the generated id and timestamp
AssessmentDraft = Dict[str, Any]

# Largest value an INTEGER primary key can hold
MAX_ASSESSMENT_ID = 2**31 - 1

_ID_PATTERN = re.compile(r"[0-9]+")


class AssessmentError(Exception):
    """Base class for assessment service errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AssessmentValidationError(AssessmentError):
    """Submission or identifier failed validation."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors


class AssessmentPersistenceError(AssessmentError):
    """The record could not be stored."""


def assemble_assessment(
    form: AssessmentFormSchema,
    rubric: RubricResult,
    feedback: FeedbackResult,
) -> AssessmentDraft:
    """Merge input, rubric and feedback into the column values of one record.

    Args:
        form: Validated assessment form
        rubric: Rubric result for the form
        feedback: Synthesized feedback

    Returns:
        Draft ready for ``AssessmentStore.create``
    """
    return {
        "name": form.name,
        "email": str(form.email),
        "role": form.role,
        "experience_level": form.experience_level,
        "technical_self_rating": form.technical_self_rating,
        "technical_mcq_answer": form.technical_mcq_answer,
        "technical_mcq_correct": rubric.technical_mcq_correct,
        "has_resume": form.has_resume,
        "resume_text": form.resume_text,
        "communication_rating": form.communication_rating,
        "has_portfolio": form.has_portfolio,
        "portfolio_url": form.portfolio_url or None,
        "score_technical": rubric.score_technical,
        "score_resume": rubric.score_resume,
        "score_communication": rubric.score_communication,
        "score_portfolio": rubric.score_portfolio,
        "total_score": rubric.total_score,
        "readiness_level": rubric.readiness_level,
        "strengths": list(feedback.strengths),
        "gaps": list(feedback.gaps),
        "improvement_plan": list(feedback.improvement_plan),
        "ai_feedback": feedback.ai_feedback,
        "estimated_days": feedback.estimated_days,
    }


class AssessmentStore:
    """Append-only persistence for assessments: create and get, nothing else."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def create(self, draft: AssessmentDraft) -> AssessmentRecord:
        """Insert a record; the database assigns the id."""
        async with self.session_factory() as session:
            assessment = Assessment(**draft)
            session.add(assessment)
            await session.commit()
            await session.refresh(assessment)
            return AssessmentRecord.model_validate(assessment)

    async def get(self, assessment_id: int) -> Optional[AssessmentRecord]:
        """Return the record, or None when no record has this id."""
        async with self.session_factory() as session:
            assessment = await session.get(Assessment, assessment_id)
            if assessment is None:
                return None
            return AssessmentRecord.model_validate(assessment)


def parse_assessment_id(raw_id: Any) -> int:
    """Parse a positive base-10 integer identifier.

    Raises:
        AssessmentValidationError: If the value is not a positive integer
    """
    if isinstance(raw_id, int) and not isinstance(raw_id, bool):
        assessment_id = raw_id
    elif isinstance(raw_id, str) and _ID_PATTERN.fullmatch(raw_id):
        assessment_id = int(raw_id)
    else:
        raise AssessmentValidationError("Invalid ID")

    if assessment_id < 1:
        raise AssessmentValidationError("Invalid ID")
    return assessment_id


class AssessmentService:
    """Orchestrates submissions and lookups."""

    def __init__(self, store: AssessmentStore, synthesizer: FeedbackSynthesizer):
        self.store = store
        self.synthesizer = synthesizer

    async def create(self, raw_input: Any) -> AssessmentRecord:
        """Validate, score, synthesize feedback and persist one submission.

        Args:
            raw_input: Decoded request body

        Returns:
            The stored record including its id

        Raises:
            AssessmentValidationError: If the submission is invalid
            AssessmentPersistenceError: If the record could not be stored
        """
        try:
            form = AssessmentFormSchema.model_validate(raw_input)
        except ValidationError as e:
            raise AssessmentValidationError(
                "Invalid input", format_validation_errors(e.errors())
            ) from e

        rubric = evaluate_readiness(form)
        feedback = await self.synthesizer.synthesize(form, rubric)
        draft = assemble_assessment(form, rubric, feedback)

        try:
            record = await self.store.create(draft)
        except Exception as e:
            logger.error(
                f"Failed to store assessment: {type(e).__name__}",
                exc_info=True,
            )
            raise AssessmentPersistenceError("Internal server error") from e

        logger.info(
            f"Created assessment {record.id}: role={record.role} "
            f"total={record.total_score} level={record.readiness_level} "
            f"feedback={feedback.source.value}"
        )
        return record

    async def get(self, raw_id: Any) -> Optional[AssessmentRecord]:
        """Look up a record by its raw path identifier.

        Returns:
            The record, or None if it does not exist

        Raises:
            AssessmentValidationError: If the identifier is malformed
        """
        assessment_id = parse_assessment_id(raw_id)
        if assessment_id > MAX_ASSESSMENT_ID:
            return None
        return await self.store.get(assessment_id)
