"""Readiness feedback prompt templates."""

from agents.common.prompts import COACHING_TONE, JSON_OUTPUT


FEEDBACK_SYSTEM_PROMPT = f"""{COACHING_TONE}

You review self-assessments from developers preparing for job interviews and
turn their scores into a short, practical one-week plan.

{JSON_OUTPUT}
"""


FEEDBACK_PROMPT = """Evaluate a {experience_level} {role} developer candidate.

Data:
- Technical Self Rating: {technical_self_rating}/10
- MCQ Answer Correct: {mcq_correct}
- Has Resume: {has_resume}
- Communication Confidence: {communication_rating}/10
- Has Portfolio: {has_portfolio}
- Total Score: {total_score}/100

Return a JSON object with exactly these fields:
- "strengths": array of 3 strings
- "gaps": array of 3 strings
- "improvement_plan": array of 3 strings (Day 1-2, Day 3-5, Day 6-7 actions)
- "feedback": a short, encouraging summary paragraph (max 2 sentences)
- "estimated_days": an integer representing how many days it will take to be fully ready (e.g. 7, 14, 21)"""


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_feedback_prompt(form, rubric) -> str:
    """Render the feedback prompt for one submission.

    Args:
        form: Validated assessment form
        rubric: Rubric result for the form

    Returns:
        Prompt text
    """
    return FEEDBACK_PROMPT.format(
        experience_level=form.experience_level,
        role=form.role,
        technical_self_rating=form.technical_self_rating,
        mcq_correct=_flag(rubric.technical_mcq_correct),
        has_resume=_flag(form.has_resume),
        communication_rating=form.communication_rating,
        has_portfolio=_flag(form.has_portfolio),
        total_score=rubric.total_score,
    )
