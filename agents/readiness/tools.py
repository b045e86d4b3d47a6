"""Deterministic readiness rubric.

Scores a validated submission across four categories (technical 40, resume 20,
communication 20, portfolio 20) and maps the total to a readiness tier.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from api.schemas.assessments import AssessmentFormSchema, McqQuestion
from database.models.assessments import ReadinessLevel

logger = logging.getLogger(__name__)

MCQ_POINTS = 15
SELF_RATING_POINTS = 25
RESUME_POINTS = 20
COMMUNICATION_POINTS = 20
PORTFOLIO_POINTS = 20

RATING_MIN = 1
RATING_MAX = 10

STRONG_CANDIDATE_THRESHOLD = 80
INTERMEDIATE_THRESHOLD = 50


# Role question bank; answers are matched verbatim against the option text
MCQ_QUESTIONS: Dict[str, McqQuestion] = {
    "frontend": McqQuestion(
        question="What is the primary purpose of React's useEffect hook?",
        options=["State management", "Side effects", "Routing", "Styling"],
    ),
    "backend": McqQuestion(
        question="Which of these is NOT a standard HTTP method?",
        options=["GET", "POST", "FETCH", "DELETE"],
    ),
    "fullstack": McqQuestion(
        question="What does ACID stand for in databases?",
        options=[
            "Atomicity Consistency Isolation Durability",
            "Access Control Identity Data",
            "Auto Config Input Data",
            "Async Callback Interface Definition",
        ],
    ),
    "mobile": McqQuestion(
        question="Which component is used for scrollable lists in React Native?",
        options=["View", "ScrollView", "FlatList", "Div"],
    ),
}

ANSWER_KEY: Dict[str, str] = {
    "frontend": "Side effects",
    "backend": "FETCH",
    "fullstack": "Atomicity Consistency Isolation Durability",
    "mobile": "FlatList",
}


@dataclass(frozen=True)
class RubricResult:
    """Category scores and tier for one submission."""

    technical_mcq_correct: bool
    score_mcq: int
    score_self_rating: int
    score_technical: int
    score_resume: int
    score_communication: int
    score_portfolio: int
    total_score: int
    readiness_level: str


def clamp_rating(rating: int) -> int:
    """Clamp a 1-10 rating into range.

    Args:
        rating: Raw rating value

    Returns:
        Rating limited to [1, 10]
    """
    clamped = min(max(int(rating), RATING_MIN), RATING_MAX)
    if clamped != rating:
        logger.warning(f"Rating {rating} outside [{RATING_MIN}, {RATING_MAX}], clamped to {clamped}")
    return clamped


def scale_rating(rating: int, points: int) -> int:
    """Scale a 1-10 rating onto ``points``, rounding halves up.

    Integer arithmetic keeps 2.5-point steps exact (e.g. 3 -> 7.5 -> 8).

    Args:
        rating: Rating in [1, 10]
        points: Maximum points for the category

    Returns:
        Scaled score between 0 and points
    """
    return (clamp_rating(rating) * points + RATING_MAX // 2) // RATING_MAX


def is_mcq_correct(role: str, answer: str) -> bool:
    """Exact, case-sensitive comparison against the role's answer key."""
    return answer == ANSWER_KEY[role]


def calculate_technical_score(role: str, mcq_answer: str, self_rating: int) -> tuple[bool, int, int]:
    """Calculate the technical category score.

    Args:
        role: Applicant role
        mcq_answer: Submitted answer to the role question
        self_rating: Technical self rating (1-10)

    Returns:
        Tuple of (mcq_correct, mcq_score, self_rating_score)
    """
    correct = is_mcq_correct(role, mcq_answer)
    score_mcq = MCQ_POINTS if correct else 0
    score_self_rating = scale_rating(self_rating, SELF_RATING_POINTS)
    return correct, score_mcq, score_self_rating


def determine_readiness_level(total_score: int) -> str:
    """Map a total score to a readiness tier.

    Boundaries are strict: 80 is Intermediate and 50 is Beginner.
    """
    if total_score > STRONG_CANDIDATE_THRESHOLD:
        return ReadinessLevel.STRONG_CANDIDATE.value
    if total_score > INTERMEDIATE_THRESHOLD:
        return ReadinessLevel.INTERMEDIATE.value
    return ReadinessLevel.BEGINNER.value


def evaluate_readiness(form: AssessmentFormSchema) -> RubricResult:
    """Score a validated submission.

    Args:
        form: Validated assessment form

    Returns:
        Immutable rubric result
    """
    correct, score_mcq, score_self_rating = calculate_technical_score(
        form.role,
        form.technical_mcq_answer,
        form.technical_self_rating,
    )
    score_technical = score_mcq + score_self_rating
    score_resume = RESUME_POINTS if form.has_resume else 0
    score_communication = scale_rating(form.communication_rating, COMMUNICATION_POINTS)
    score_portfolio = PORTFOLIO_POINTS if form.has_portfolio else 0

    total_score = score_technical + score_resume + score_communication + score_portfolio

    return RubricResult(
        technical_mcq_correct=correct,
        score_mcq=score_mcq,
        score_self_rating=score_self_rating,
        score_technical=score_technical,
        score_resume=score_resume,
        score_communication=score_communication,
        score_portfolio=score_portfolio,
        total_score=total_score,
        readiness_level=determine_readiness_level(total_score),
    )
