"""
Tests for assessment assembly, storage and orchestration.
"""

import logging

import pytest

from agents.readiness.agent import FeedbackResult, FeedbackSource, FeedbackSynthesizer
from agents.readiness.tools import evaluate_readiness
from api.schemas.assessments import AssessmentFormSchema
from api.services.assessments import (
    MAX_ASSESSMENT_ID,
    AssessmentPersistenceError,
    AssessmentService,
    AssessmentValidationError,
    assemble_assessment,
    parse_assessment_id,
)
from tests.fakes import FakeTextGenerator, InMemoryAssessmentStore


@pytest.fixture
def form(valid_form_data):
    return AssessmentFormSchema.model_validate(valid_form_data)


@pytest.fixture
def feedback():
    return FeedbackResult(
        strengths=("Curious", "Consistent"),
        gaps=("Testing",),
        improvement_plan=("Day 1: Write tests",),
        ai_feedback="Keep going.",
        estimated_days=12,
        source=FeedbackSource.OK,
    )


@pytest.fixture
def draft(form, feedback):
    return assemble_assessment(form, evaluate_readiness(form), feedback)


class TestAssembleAssessment:
    """Merging input, rubric and feedback."""

    def test_contains_every_column(self, draft):
        assert set(draft) == {
            "name", "email", "role", "experience_level",
            "technical_self_rating", "technical_mcq_answer", "technical_mcq_correct",
            "has_resume", "resume_text", "communication_rating",
            "has_portfolio", "portfolio_url",
            "score_technical", "score_resume", "score_communication", "score_portfolio",
            "total_score", "readiness_level",
            "strengths", "gaps", "improvement_plan", "ai_feedback", "estimated_days",
        }

    def test_values(self, draft):
        assert draft["email"] == "ada@example.com"
        assert draft["technical_mcq_correct"] is True
        assert draft["total_score"] == 100
        assert draft["readiness_level"] == "Strong Candidate"
        assert draft["strengths"] == ["Curious", "Consistent"]
        assert draft["estimated_days"] == 12

    def test_total_is_sum_of_categories(self, draft):
        assert draft["total_score"] == (
            draft["score_technical"]
            + draft["score_resume"]
            + draft["score_communication"]
            + draft["score_portfolio"]
        )


class TestParseAssessmentId:
    """Path identifier parsing."""

    @pytest.mark.parametrize("raw_id,expected", [
        ("1", 1),
        ("42", 42),
        ("007", 7),
        (5, 5),
    ])
    def test_valid(self, raw_id, expected):
        assert parse_assessment_id(raw_id) == expected

    @pytest.mark.parametrize("raw_id", ["", "abc", "0", "-1", "1.0", "12abc", " 1", "1e3", "12\n", 0, True, None])
    def test_invalid(self, raw_id):
        with pytest.raises(AssessmentValidationError) as exc_info:
            parse_assessment_id(raw_id)
        assert exc_info.value.message == "Invalid ID"


class TestAssessmentStore:
    """SQL-backed store over an in-memory database."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, store, draft):
        created = await store.create(draft)
        fetched = await store.get(created.id)

        assert created.id >= 1
        assert created.created_at is not None
        assert fetched == created
        assert fetched.strengths == ["Curious", "Consistent"]
        assert fetched.improvement_plan == ["Day 1: Write tests"]

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get(12345) is None

    @pytest.mark.asyncio
    async def test_ids_strictly_increase(self, store, draft):
        first = await store.create(draft)
        second = await store.create(draft)
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_null_optional_fields(self, store, draft):
        created = await store.create({**draft, "resume_text": None, "portfolio_url": None})

        fetched = await store.get(created.id)
        assert fetched.resume_text is None
        assert fetched.portfolio_url is None


class TestAssessmentService:
    """Orchestration of one submission."""

    @pytest.mark.asyncio
    async def test_create_persists_record(self, store, synthesizer, valid_form_data):
        service = AssessmentService(store, synthesizer)

        record = await service.create(valid_form_data)

        assert record.id >= 1
        assert record.total_score == 100
        assert record.strengths[0] == "Strong React fundamentals"
        assert await service.get(str(record.id)) == record

    @pytest.mark.asyncio
    async def test_create_logs_summary(self, synthesizer, valid_form_data, caplog):
        service = AssessmentService(InMemoryAssessmentStore(), synthesizer)

        with caplog.at_level(logging.INFO, logger="api.services.assessments"):
            await service.create(valid_form_data)

        assert "Created assessment 1" in caplog.text
        assert "feedback=ok" in caplog.text
        assert valid_form_data["email"] not in caplog.text

    @pytest.mark.asyncio
    async def test_invalid_input_skips_synthesis(self, valid_form_data):
        generator = FakeTextGenerator()
        store = InMemoryAssessmentStore()
        service = AssessmentService(store, FeedbackSynthesizer(generator))

        with pytest.raises(AssessmentValidationError) as exc_info:
            await service.create({**valid_form_data, "technicalSelfRating": 0})

        assert exc_info.value.message == "Invalid input"
        assert exc_info.value.errors[0]["field"] == "technicalSelfRating"
        assert generator.prompts == []
        assert store.records == {}

    @pytest.mark.asyncio
    async def test_storage_failure(self, synthesizer, valid_form_data):
        store = InMemoryAssessmentStore()
        store.fail_with = RuntimeError("disk full")
        service = AssessmentService(store, synthesizer)

        with pytest.raises(AssessmentPersistenceError) as exc_info:
            await service.create(valid_form_data)

        assert exc_info.value.message == "Internal server error"

    @pytest.mark.asyncio
    async def test_get_invalid_id(self, synthesizer):
        service = AssessmentService(InMemoryAssessmentStore(), synthesizer)
        with pytest.raises(AssessmentValidationError):
            await service.get("abc")

    @pytest.mark.asyncio
    async def test_get_out_of_range_id(self, synthesizer):
        service = AssessmentService(InMemoryAssessmentStore(), synthesizer)
        assert await service.get(str(MAX_ASSESSMENT_ID + 1)) is None
