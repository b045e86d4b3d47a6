"""Shared fixtures and utilities for tests."""

import os

# Settings are read at import time, so the environment must be ready before
# any application module is imported by a test module.
os.environ.setdefault("AI_INTEGRATIONS_API_KEY", "test-ai-key")
os.environ.setdefault("AI_INTEGRATIONS_BASE_URL", "http://localhost:9999")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from agents.readiness.agent import FeedbackSynthesizer
from api.services.assessments import AssessmentStore
from database.engine import Base
import database.models.assessments  # noqa: F401
from tests.fakes import FakeTextGenerator, GOOD_FEEDBACK_JSON

@pytest.fixture
def valid_form_data():
    """Valid submission in wire format (scenario A: perfect score)."""
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "role": "frontend",
        "experienceLevel": "junior",
        "technicalSelfRating": 10,
        "technicalMcqAnswer": "Side effects",
        "hasResume": True,
        "resumeText": "Built things.",
        "communicationRating": 10,
        "hasPortfolio": True,
        "portfolioUrl": "https://ada.dev",
    }


@pytest.fixture
def fake_generator():
    """Generator returning a complete, well-formed feedback payload."""
    return FakeTextGenerator(response=GOOD_FEEDBACK_JSON)


@pytest.fixture
def synthesizer(fake_generator):
    """Synthesizer wired to the fake generator."""
    return FeedbackSynthesizer(fake_generator, timeout_seconds=1.0)


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite database with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def store(session_factory):
    """Assessment store over the in-memory database."""
    return AssessmentStore(session_factory)
