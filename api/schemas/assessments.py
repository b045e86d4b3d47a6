"""Assessment API schemas.

``AssessmentFormSchema`` is the single validation definition for a submission:
the endpoint validates against it and the client fetches its JSON Schema from
``GET /api/assessments/form-schema`` for pre-checks.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import AnyUrl, BaseModel, ConfigDict, EmailStr, Field, StrictBool, StrictInt, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

# Type aliases for the enumerated form fields
RoleType = Literal["frontend", "backend", "fullstack", "mobile"]
ExperienceLevelType = Literal["intern", "junior", "mid", "senior"]
ReadinessLevelType = Literal["Beginner", "Intermediate", "Strong Candidate"]

VALID_ROLES: tuple[str, ...] = ("frontend", "backend", "fullstack", "mobile")
VALID_EXPERIENCE_LEVELS: tuple[str, ...] = ("intern", "junior", "mid", "senior")

_url_adapter = TypeAdapter(AnyUrl)


class CamelModel(BaseModel):
    """Base model exchanging camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AssessmentFormSchema(CamelModel):
    """Schema for a self-assessment submission."""

    name: str = Field(..., min_length=2, max_length=200, description="Candidate name")
    email: EmailStr
    role: RoleType
    experience_level: ExperienceLevelType
    technical_self_rating: StrictInt = Field(..., ge=1, le=10, description="Technical self rating (1-10)")
    technical_mcq_answer: str = Field(..., min_length=1, description="Selected answer to the role question")
    has_resume: StrictBool
    resume_text: Optional[str] = Field(None, description="Optional pasted resume text, not scored")
    communication_rating: StrictInt = Field(..., ge=1, le=10, description="Communication confidence (1-10)")
    has_portfolio: StrictBool
    portfolio_url: Optional[str] = Field(None, description="Portfolio link, validated when non-empty")

    @field_validator("name", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from the name."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("portfolio_url", mode="before")
    @classmethod
    def validate_portfolio_url(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty as absent; otherwise require a well-formed URL."""
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("Invalid URL")
        url = v.strip()
        if not url:
            return None
        try:
            _url_adapter.validate_python(url)
        except ValueError:
            raise ValueError("Invalid URL") from None
        return url


class AssessmentResponse(CamelModel):
    """Schema for a persisted assessment record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "role": "frontend",
                "experienceLevel": "junior",
                "technicalSelfRating": 7,
                "technicalMcqAnswer": "Side effects",
                "technicalMcqCorrect": True,
                "hasResume": True,
                "resumeText": None,
                "communicationRating": 8,
                "hasPortfolio": False,
                "portfolioUrl": None,
                "scoreTechnical": 33,
                "scoreResume": 20,
                "scoreCommunication": 16,
                "scorePortfolio": 0,
                "totalScore": 69,
                "readinessLevel": "Intermediate",
                "strengths": ["Solid React fundamentals", "Has a resume", "Confident communicator"],
                "gaps": ["No portfolio", "Limited system design", "Testing practice"],
                "improvementPlan": [
                    "Day 1-2: Review hooks and state management",
                    "Day 3-5: Build and deploy a small project",
                    "Day 6-7: Run two mock interviews",
                ],
                "aiFeedback": "You have a good foundation. A public portfolio would make you stand out.",
                "estimatedDays": 14,
                "createdAt": "2026-01-13T12:00:00Z",
            }
        },
    )

    id: int
    name: str
    email: str
    role: RoleType
    experience_level: ExperienceLevelType
    technical_self_rating: int
    technical_mcq_answer: str
    technical_mcq_correct: bool
    has_resume: bool
    resume_text: Optional[str] = None
    communication_rating: int
    has_portfolio: bool
    portfolio_url: Optional[str] = None
    score_technical: int = Field(..., ge=0, le=40)
    score_resume: int = Field(..., ge=0, le=20)
    score_communication: int = Field(..., ge=0, le=20)
    score_portfolio: int = Field(..., ge=0, le=20)
    total_score: int = Field(..., ge=0, le=100)
    readiness_level: ReadinessLevelType
    strengths: list[str]
    gaps: list[str]
    improvement_plan: list[str]
    ai_feedback: str
    estimated_days: int = Field(..., gt=0)
    created_at: datetime


# A persisted assessment as returned by the store
AssessmentRecord = AssessmentResponse


class McqQuestion(BaseModel):
    """Role-specific multiple-choice question shown on the form."""

    question: str
    options: list[str]
