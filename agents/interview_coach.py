# =============================================================================
# agents/interview_coach.py - Interview Coach Agent
# =============================================================================
# This module implements the agent behind the two AI endpoints:
# 1. generate_questions: role/experience/topics -> questions with answers
# 2. explain_concept: concept name -> titled explanation
#
# Each call:
# - Builds a prompt (see agents/prompts/interview_prompts.py)
# - Calls OpenAI in JSON mode (async client, per-request timeout, bounded retries)
# - Validates the result with pydantic
#
# Provider failures never leak to clients: they are mapped to
# UpstreamTimeoutError (503), UpstreamUnavailableError (502/503) or
# UpstreamBadResponseError (502).
#
# Usage:
#   from agents.interview_coach import InterviewCoach
#   coach = InterviewCoach(settings)
#   result = await coach.explain_concept(ConceptExplanationRequest(concept="binary search"))
# =============================================================================

from __future__ import annotations

import json
import logging
from typing import TypeVar
from uuid import UUID

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    OpenAIError,
    RateLimitError,
)
from pydantic import BaseModel, ValidationError

from agents.models.generation import (
    ConceptExplanation,
    ConceptExplanationRequest,
    QuestionGenerationRequest,
    QuestionSet,
)
from agents.prompts.interview_prompts import (
    EXPLANATION_SYSTEM_PROMPT,
    QUESTIONS_SYSTEM_PROMPT,
    build_explanation_prompt,
    build_questions_prompt,
)
from app.config import Settings
from app.exceptions import (
    UpstreamBadResponseError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

# Set up logging for this module
logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


class InterviewCoach:
    """
    Generates interview questions and concept explanations with OpenAI.

    Example:
        coach = InterviewCoach(settings)

        question_set = await coach.generate_questions(
            QuestionGenerationRequest(
                role="Frontend Developer",
                experience="2 years",
                topics_to_focus="React, CSS",
                number_of_questions=5,
            )
        )
        print(question_set.questions[0].question)

    Attributes:
        model: OpenAI model to use (default from settings)
        temperature: Generation temperature
    """

    def __init__(
        self,
        settings: Settings,
        client: AsyncOpenAI | None = None,
    ):
        """
        Initialize the coach.

        Args:
            settings: Application settings (API key, model, timeout, retries)
            client: Pre-built OpenAI client (tests pass a mock here)
        """
        self.client = client or AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY.get_secret_value(),
            timeout=settings.AI_TIMEOUT_SECONDS,
            max_retries=settings.AI_MAX_RETRIES,
        )
        self.model = settings.OPENAI_MODEL
        self.temperature = settings.AI_TEMPERATURE

        logger.info(f"InterviewCoach initialized with model={self.model}, temp={self.temperature}")

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def generate_questions(
        self,
        request: QuestionGenerationRequest,
        user_id: UUID | str | None = None,
    ) -> QuestionSet:
        """
        Generate interview questions with model answers.

        Returns at most request.number_of_questions questions; extras the
        model produces are dropped.

        Raises:
            UpstreamUnavailableError: (or a subclass) if the AI call fails
        """
        logger.info(
            f"Generating {request.number_of_questions} questions for user {user_id}: "
            f"role='{request.role[:50]}'"
        )

        text = await self._complete(
            system_prompt=QUESTIONS_SYSTEM_PROMPT,
            user_prompt=build_questions_prompt(
                role=request.role,
                experience=request.experience,
                topics=request.topics_to_focus,
                count=request.number_of_questions,
            ),
            operation="generate_questions",
        )

        question_set = self._parse(text, QuestionSet)
        if len(question_set.questions) > request.number_of_questions:
            question_set = QuestionSet(questions=question_set.questions[: request.number_of_questions])

        logger.info(f"Generated {len(question_set.questions)} questions")
        return question_set

    async def explain_concept(
        self,
        request: ConceptExplanationRequest,
        user_id: UUID | str | None = None,
    ) -> ConceptExplanation:
        """
        Explain a concept for interview preparation.

        Raises:
            UpstreamUnavailableError: (or a subclass) if the AI call fails
        """
        logger.info(f"Explaining concept for user {user_id}: '{request.concept[:50]}'")

        text = await self._complete(
            system_prompt=EXPLANATION_SYSTEM_PROMPT,
            user_prompt=build_explanation_prompt(request.concept),
            operation="explain_concept",
        )
        return self._parse(text, ConceptExplanation)

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self.client.close()

    # -------------------------------------------------------------------------
    # OpenAI Call
    # -------------------------------------------------------------------------

    async def _complete(self, system_prompt: str, user_prompt: str, operation: str) -> str:
        """
        Run one JSON-mode chat completion and return the message text.

        The SDK already retries transient failures (AI_MAX_RETRIES); anything
        still failing here is mapped to an upstream error.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                response_format={"type": "json_object"},  # Force JSON output
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except APITimeoutError as e:
            logger.warning(f"OpenAI {operation} timed out: {e}")
            raise UpstreamTimeoutError(str(e)) from e
        except RateLimitError as e:
            logger.warning(f"OpenAI {operation} rate limited: {e}")
            raise UpstreamUnavailableError(str(e), status_code=503) from e
        except (APIConnectionError, APIStatusError) as e:
            logger.error(f"OpenAI {operation} failed: {e}")
            raise UpstreamUnavailableError(str(e)) from e
        except OpenAIError as e:
            logger.error(f"OpenAI {operation} client error: {e}")
            raise UpstreamUnavailableError(str(e)) from e

        if not response.choices:
            raise UpstreamBadResponseError("Response contained no choices")

        text = response.choices[0].message.content or ""
        logger.debug(f"OpenAI response: {text[:200]}...")

        if not text.strip():
            raise UpstreamBadResponseError("Response was empty")
        return text

    # -------------------------------------------------------------------------
    # Response Parsing
    # -------------------------------------------------------------------------

    def _parse(self, text: str, model: type[ResultT]) -> ResultT:
        """
        Parse the model's JSON text into a result schema.

        Raises:
            UpstreamBadResponseError: Invalid JSON or a schema mismatch
        """
        try:
            data = json.loads(_strip_code_fence(text))
        except json.JSONDecodeError as e:
            raise UpstreamBadResponseError(f"Invalid JSON from model: {e}", raw_response=text) from e

        try:
            return model.model_validate(data)
        except ValidationError as e:
            errors = [f"{err['loc']}: {err['msg']}" for err in e.errors()]
            raise UpstreamBadResponseError(
                f"Invalid {model.__name__} structure: {'; '.join(errors)}",
                raw_response=text,
            ) from e


def _strip_code_fence(text: str) -> str:
    """Remove a ```json ... ``` wrapper if the model added one anyway."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()
