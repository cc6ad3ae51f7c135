# =============================================================================
# agents/ - AI Agent Definitions
# =============================================================================
# This package contains the AI side of the API:
# - interview_coach.py: generates interview questions and explains concepts
#
# Models:
# - models/generation.py: request and result schemas for the coach
#
# Prompts:
# - prompts/interview_prompts.py: system prompts and prompt builders
# =============================================================================

from agents.interview_coach import InterviewCoach
from agents.models.generation import (
    ConceptExplanation,
    ConceptExplanationRequest,
    QuestionGenerationRequest,
    QuestionSet,
)

__all__ = [
    # Agent
    "InterviewCoach",
    # Models
    "ConceptExplanation",
    "ConceptExplanationRequest",
    "QuestionGenerationRequest",
    "QuestionSet",
]
