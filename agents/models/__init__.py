# =============================================================================
# agents/models/ - Schemas passed into and out of the AI agents
# =============================================================================

from agents.models.generation import (
    MAX_QUESTIONS,
    ConceptExplanation,
    ConceptExplanationRequest,
    QuestionGenerationRequest,
    QuestionSet,
)

__all__ = [
    "MAX_QUESTIONS",
    "ConceptExplanation",
    "ConceptExplanationRequest",
    "QuestionGenerationRequest",
    "QuestionSet",
]
