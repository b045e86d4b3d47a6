"""Feedback synthesizer for readiness assessments."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from agents.base import TextGenerator
from agents.common.utils import parse_json_response, retry_with_backoff
from agents.readiness.prompts import build_feedback_prompt
from agents.readiness.tools import RubricResult, STRONG_CANDIDATE_THRESHOLD
from api.schemas.assessments import AssessmentFormSchema

logger = logging.getLogger(__name__)

LIST_ITEM_LIMIT = 3

DEFAULT_STRENGTHS = ("Ambitious attitude",)
DEFAULT_GAPS = ("General technical review needed",)
DEFAULT_IMPROVEMENT_PLAN = ("Review basics", "Build a project", "Practice mock interviews")
DEFAULT_FEEDBACK = "Keep learning and practicing!"


class FeedbackSource(str, Enum):
    """How much of a feedback result came from the model."""
    OK = "ok"  # All fields usable
    PARTIAL = "partial"  # Some fields defaulted
    FALLBACK = "fallback"  # Call failed or nothing usable


@dataclass(frozen=True)
class FeedbackResult:
    """Structured feedback for one assessment."""

    strengths: tuple[str, ...]
    gaps: tuple[str, ...]
    improvement_plan: tuple[str, ...]
    ai_feedback: str
    estimated_days: int
    source: FeedbackSource = FeedbackSource.OK


def default_estimated_days(total_score: int) -> int:
    return 7 if total_score > STRONG_CANDIDATE_THRESHOLD else 14


def fallback_feedback(total_score: int) -> FeedbackResult:
    """Static feedback used when the model cannot be reached."""
    return FeedbackResult(
        strengths=DEFAULT_STRENGTHS,
        gaps=DEFAULT_GAPS,
        improvement_plan=DEFAULT_IMPROVEMENT_PLAN,
        ai_feedback=DEFAULT_FEEDBACK,
        estimated_days=default_estimated_days(total_score),
        source=FeedbackSource.FALLBACK,
    )


def _string_list(value: Any) -> Optional[tuple[str, ...]]:
    """Keep non-blank string items, capped at three. None if nothing usable."""
    if not isinstance(value, list):
        return None
    items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    if not items:
        return None
    return tuple(items[:LIST_ITEM_LIMIT])


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _positive_int(value: Any) -> Optional[int]:
    # bool is an int subclass
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer() and value > 0:
        return int(value)
    return None


def normalize_feedback(payload: Optional[Dict[str, Any]], total_score: int) -> FeedbackResult:
    """Validate a model payload field by field, substituting defaults.

    Args:
        payload: Parsed JSON object from the model, or None
        total_score: Rubric total, used for the estimated days default

    Returns:
        Feedback result tagged with its source
    """
    payload = payload or {}

    strengths = _string_list(payload.get("strengths"))
    gaps = _string_list(payload.get("gaps"))
    improvement_plan = _string_list(payload.get("improvement_plan"))
    ai_feedback = _text(payload.get("feedback"))
    estimated_days = _positive_int(payload.get("estimated_days"))

    fields = (strengths, gaps, improvement_plan, ai_feedback, estimated_days)
    usable = sum(1 for field in fields if field is not None)
    if usable == len(fields):
        source = FeedbackSource.OK
    elif usable:
        source = FeedbackSource.PARTIAL
    else:
        source = FeedbackSource.FALLBACK

    return FeedbackResult(
        strengths=strengths or DEFAULT_STRENGTHS,
        gaps=gaps or DEFAULT_GAPS,
        improvement_plan=improvement_plan or DEFAULT_IMPROVEMENT_PLAN,
        ai_feedback=ai_feedback or DEFAULT_FEEDBACK,
        estimated_days=estimated_days or default_estimated_days(total_score),
        source=source,
    )


class FeedbackSynthesizer:
    """Requests structured coaching feedback and never fails outward.

    One outbound call per submission. Timeouts, transport errors and malformed
    output all degrade to the static defaults.
    """

    def __init__(
        self,
        generator: TextGenerator,
        timeout_seconds: float = 30.0,
        max_retries: int = 0,
        retry_initial_delay: float = 1.0,
    ):
        """Initialize the synthesizer.

        Args:
            generator: Text generation client
            timeout_seconds: Upper bound for each generation attempt
            max_retries: Extra attempts after a failed call (0 = single attempt)
            retry_initial_delay: Delay before the first retry, doubled afterwards
        """
        self.generator = generator
        self.timeout_seconds = timeout_seconds
        self._generate = retry_with_backoff(
            max_retries=max_retries,
            initial_delay=retry_initial_delay,
        )(self._generate_once)

    async def _generate_once(self, prompt: str) -> str:
        return await asyncio.wait_for(
            self.generator.generate(prompt),
            timeout=self.timeout_seconds,
        )

    async def synthesize(self, form: AssessmentFormSchema, rubric: RubricResult) -> FeedbackResult:
        """Generate feedback for a scored submission.

        Args:
            form: Validated assessment form
            rubric: Rubric result for the form

        Returns:
            Feedback result, defaults included where the model fell short
        """
        try:
            prompt = build_feedback_prompt(form, rubric)
            response = await self._generate(prompt)
            feedback = normalize_feedback(parse_json_response(response), rubric.total_score)
        except Exception as e:
            logger.warning(
                f"Feedback generation failed, using defaults: {type(e).__name__}: {e}"
            )
            return fallback_feedback(rubric.total_score)

        if feedback.source is not FeedbackSource.OK:
            logger.warning(f"Feedback response incomplete, source={feedback.source.value}")
        else:
            logger.info("Feedback generated")

        return feedback
