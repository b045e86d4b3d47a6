"""Career readiness assessment model."""

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, Boolean, Integer, Text, JSON, func, Index
from sqlalchemy.dialects.postgresql import JSONB
from database.engine import Base
from datetime import datetime
from enum import Enum as PyEnum


# JSONB on PostgreSQL, plain JSON elsewhere
JSONList = JSON().with_variant(JSONB(), "postgresql")


class ReadinessLevel(str, PyEnum):
    """Readiness tier derived from the total score."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    STRONG_CANDIDATE = "Strong Candidate"


class Assessment(Base):
    """
    One submitted self-assessment with its rubric scores and generated feedback.

    Rows are append-only: created once per submission, never updated or deleted.
    """

    __tablename__: str = "assessments"
    id: Mapped[int] = mapped_column(primary_key=True, nullable=False, autoincrement=True)

    # Identity
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    experience_level: Mapped[str] = mapped_column(String(20), nullable=False)

    # Technical inputs
    technical_self_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    technical_mcq_answer: Mapped[str] = mapped_column(Text, nullable=False)
    technical_mcq_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # Resume inputs
    has_resume: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    resume_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Communication inputs
    communication_rating: Mapped[int] = mapped_column(Integer, nullable=False)

    # Portfolio inputs
    has_portfolio: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    portfolio_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Rubric results
    score_technical: Mapped[int] = mapped_column(Integer, nullable=False, comment="out of 40")
    score_resume: Mapped[int] = mapped_column(Integer, nullable=False, comment="out of 20")
    score_communication: Mapped[int] = mapped_column(Integer, nullable=False, comment="out of 20")
    score_portfolio: Mapped[int] = mapped_column(Integer, nullable=False, comment="out of 20")
    total_score: Mapped[int] = mapped_column(Integer, nullable=False, comment="0-100")
    readiness_level: Mapped[str] = mapped_column(String(32), nullable=False, index=True)

    # Generated feedback
    strengths: Mapped[list[str]] = mapped_column(JSONList, nullable=False)
    gaps: Mapped[list[str]] = mapped_column(JSONList, nullable=False)
    improvement_plan: Mapped[list[str]] = mapped_column(JSONList, nullable=False)
    ai_feedback: Mapped[str] = mapped_column(Text, nullable=False)
    estimated_days: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_assessments_role_total", "role", "total_score"),
    )
