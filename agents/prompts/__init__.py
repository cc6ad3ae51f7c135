# =============================================================================
# agents/prompts/ - System Prompts for AI Agents
# =============================================================================
# This package contains the interview coach prompts:
# - interview_prompts.py: question generation and concept explanation
#
# Organized with XML tags for clear structure.
# =============================================================================

from agents.prompts.interview_prompts import (
    EXPLANATION_SYSTEM_PROMPT,
    QUESTIONS_SYSTEM_PROMPT,
    build_explanation_prompt,
    build_questions_prompt,
)

__all__ = [
    "EXPLANATION_SYSTEM_PROMPT",
    "QUESTIONS_SYSTEM_PROMPT",
    "build_explanation_prompt",
    "build_questions_prompt",
]
