# =============================================================================
# agents/models/generation.py - Interview Coach Input/Output Schemas
# =============================================================================
# Request models validate what the client asks for; result models validate
# what the AI returns. A result that fails validation is treated as an
# upstream failure, never passed through.
# =============================================================================

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from core.models.question import QuestionAnswer

MAX_QUESTIONS = 20


# =============================================================================
# Requests
# =============================================================================

class QuestionGenerationRequest(BaseModel):
    """
    Parameters for generating interview questions.

    Example:
        {
            "role": "Backend Engineer",
            "experience": "4 years",
            "topics_to_focus": "Python, PostgreSQL, system design",
            "number_of_questions": 8
        }
    """

    role: str = Field(..., min_length=1, max_length=200)
    experience: str = Field(..., min_length=1, max_length=100)
    topics_to_focus: str = Field(..., min_length=1, max_length=1000)
    number_of_questions: int = Field(default=10, ge=1, le=MAX_QUESTIONS)

    @field_validator("role", "experience", "topics_to_focus")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ConceptExplanationRequest(BaseModel):
    """Concept to explain, e.g. {"concept": "binary search"}."""

    concept: str = Field(..., min_length=1, max_length=500)

    @field_validator("concept")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


# =============================================================================
# Results
# =============================================================================

class QuestionSet(BaseModel):
    """Generated questions with model answers."""

    questions: list[QuestionAnswer] = Field(..., min_length=1)


class ConceptExplanation(BaseModel):
    """A titled explanation of a concept (markdown allowed in the body)."""

    title: str = Field(..., min_length=1, max_length=300)
    explanation: str = Field(..., min_length=1)
