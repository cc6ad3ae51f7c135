# =============================================================================
# agents/prompts/interview_prompts.py - Interview Coach Prompts
# =============================================================================
# System prompts and user-prompt builders for the interview coach.
#
# Both prompts require a single JSON object as output so the response can
# be validated with pydantic (OpenAI JSON mode only accepts objects).
#
# Usage:
#   system = QUESTIONS_SYSTEM_PROMPT
#   user = build_questions_prompt(role="...", experience="...", topics="...", count=10)
# =============================================================================

from __future__ import annotations

# =============================================================================
# Question Generation
# =============================================================================

QUESTIONS_SYSTEM_PROMPT = """
<role>
You are an experienced technical interviewer helping a candidate prepare.
You write realistic interview questions and clear, correct model answers.
</role>

<guidelines>
- Match the difficulty to the candidate's experience level.
- Cover the listed topics; spread questions across them.
- Answers should be beginner-friendly but accurate.
- Use markdown in answers. Put code in fenced code blocks.
- Do not number the questions.
</guidelines>

<output_format>
Respond with a single JSON object and nothing else:
{
  "questions": [
    {"question": "Question text", "answer": "Model answer"}
  ]
}
</output_format>
"""


def build_questions_prompt(
    role: str,
    experience: str,
    topics: str,
    count: int,
) -> str:
    """
    Build the user message for question generation.

    Args:
        role: Target job role
        experience: Candidate experience level
        topics: Comma-separated topics to focus on
        count: Number of questions to produce

    Returns:
        User prompt text
    """
    return (
        f"Role: {role}\n"
        f"Candidate experience: {experience}\n"
        f"Focus topics: {topics}\n\n"
        f"Write exactly {count} interview questions with model answers."
    )


# =============================================================================
# Concept Explanation
# =============================================================================

EXPLANATION_SYSTEM_PROMPT = """
<role>
You are a patient senior engineer explaining concepts to someone preparing
for a technical interview.
</role>

<guidelines>
- Explain the concept in depth, as you would to a junior developer.
- Include a small example; put code in fenced code blocks.
- Use markdown for structure.
- The title is a short, clear heading for the concept.
</guidelines>

<output_format>
Respond with a single JSON object and nothing else:
{
  "title": "Short title",
  "explanation": "Markdown explanation"
}
</output_format>
"""


def build_explanation_prompt(concept: str) -> str:
    """Build the user message for a concept explanation."""
    return f"Explain the following concept for interview preparation: {concept}"
