# =============================================================================
# tests/test_ai_routes.py - /api/ai Endpoint Tests
# =============================================================================
# The two AI endpoints with a mocked InterviewCoach: authentication,
# validation and the mapping of upstream failures to 502/503.
# =============================================================================

import pytest

from agents.models import ConceptExplanation, ConceptExplanationRequest, QuestionGenerationRequest, QuestionSet
from app.exceptions import UpstreamBadResponseError, UpstreamTimeoutError, UpstreamUnavailableError
from tests.conftest import TEST_USER_ID

QUESTIONS_URL = "/api/ai/generate-questions"
EXPLANATION_URL = "/api/ai/generate-explanation"

QUESTIONS_BODY = {
    "role": "Frontend Developer",
    "experience": "2 years",
    "topics_to_focus": "React, TypeScript",
    "number_of_questions": 2,
}


class TestGenerateQuestions:
    """Tests for POST /api/ai/generate-questions."""

    def test_requires_auth(self, client, mock_coach):
        response = client.post(QUESTIONS_URL, json=QUESTIONS_BODY)

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token missing"
        mock_coach.generate_questions.assert_not_called()

    def test_generate_questions(self, client, auth_headers, mock_coach):
        mock_coach.generate_questions.return_value = QuestionSet(
            questions=[
                {"question": "What is JSX?", "answer": "Syntax sugar for createElement."},
                {"question": "What is a hook?", "answer": "A function using React state."},
            ]
        )

        response = client.post(QUESTIONS_URL, headers=auth_headers, json=QUESTIONS_BODY)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [q["question"] for q in body["data"]["questions"]] == ["What is JSX?", "What is a hook?"]

        request = mock_coach.generate_questions.await_args.args[0]
        assert isinstance(request, QuestionGenerationRequest)
        assert request.number_of_questions == 2
        assert mock_coach.generate_questions.await_args.kwargs["user_id"] == TEST_USER_ID

    def test_too_many_questions(self, client, auth_headers, mock_coach):
        response = client.post(
            QUESTIONS_URL,
            headers=auth_headers,
            json={**QUESTIONS_BODY, "number_of_questions": 50},
        )

        assert response.status_code == 422
        mock_coach.generate_questions.assert_not_called()

    def test_bad_response_is_502(self, client, auth_headers, mock_coach):
        mock_coach.generate_questions.side_effect = UpstreamBadResponseError("not json", raw_response="oops")

        response = client.post(QUESTIONS_URL, headers=auth_headers, json=QUESTIONS_BODY)

        assert response.status_code == 502
        assert response.json() == {
            "success": False,
            "message": "AI service returned an invalid response",
            "data": None,
        }


class TestGenerateExplanation:
    """Tests for POST /api/ai/generate-explanation."""

    def test_generate_explanation(self, client, auth_headers, mock_coach):
        mock_coach.explain_concept.return_value = ConceptExplanation(
            title="Binary Search",
            explanation="Halve the search space each step.",
        )

        response = client.post(EXPLANATION_URL, headers=auth_headers, json={"concept": "binary search"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "",
            "data": {"title": "Binary Search", "explanation": "Halve the search space each step."},
        }
        request = mock_coach.explain_concept.await_args.args[0]
        assert request == ConceptExplanationRequest(concept="binary search")

    def test_cookie_auth(self, client, token, mock_coach):
        mock_coach.explain_concept.return_value = ConceptExplanation(title="T", explanation="E")
        client.cookies.set("token", token)

        response = client.post(EXPLANATION_URL, json={"concept": "closures"})

        assert response.status_code == 200

    def test_blank_concept(self, client, auth_headers, mock_coach):
        response = client.post(EXPLANATION_URL, headers=auth_headers, json={"concept": "   "})

        assert response.status_code == 422
        assert "concept" in response.json()["message"]
        mock_coach.explain_concept.assert_not_called()

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (UpstreamTimeoutError("timed out"), 503),
            (UpstreamUnavailableError("rate limited", status_code=503), 503),
            (UpstreamUnavailableError("500 from provider"), 502),
        ],
    )
    def test_upstream_failures(self, client, auth_headers, mock_coach, error, status_code):
        mock_coach.explain_concept.side_effect = error

        response = client.post(EXPLANATION_URL, headers=auth_headers, json={"concept": "closures"})

        assert response.status_code == status_code
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None
        assert "provider" not in body["message"]
