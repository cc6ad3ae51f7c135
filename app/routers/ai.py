# =============================================================================
# app/routers/ai.py - AI Generation Endpoints
# =============================================================================
# Two authenticated endpoints proxying the OpenAI-backed interview coach:
# - POST /generate-questions
# - POST /generate-explanation
#
# These are async: the coach awaits the OpenAI call, so a slow provider
# never blocks other requests. Upstream failures surface as 502/503
# envelopes via the terminal error handler.
# =============================================================================

from fastapi import APIRouter

from agents.models.generation import (
    ConceptExplanation,
    ConceptExplanationRequest,
    QuestionGenerationRequest,
    QuestionSet,
)
from app.auth import CurrentUser
from app.dependencies import InterviewCoachDep
from core.models.envelope import Envelope, success_envelope

router = APIRouter()


@router.post("/generate-questions", response_model=Envelope[QuestionSet])
async def generate_interview_questions(
    user: CurrentUser,
    body: QuestionGenerationRequest,
    coach: InterviewCoachDep,
):
    """
    Generate interview questions with model answers.

    Body: role, experience, topics_to_focus, number_of_questions (1-20).
    """
    question_set = await coach.generate_questions(body, user_id=user.id)
    return success_envelope(question_set)


@router.post("/generate-explanation", response_model=Envelope[ConceptExplanation])
async def generate_concept_explanation(
    user: CurrentUser,
    body: ConceptExplanationRequest,
    coach: InterviewCoachDep,
):
    """
    Explain a concept, e.g. {"concept": "binary search"}.
    """
    explanation = await coach.explain_concept(body, user_id=user.id)
    return success_envelope(explanation)
