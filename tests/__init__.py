# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the InterviewPrep API:
# - test_config.py / test_envelope.py / test_models.py: settings and schemas
# - test_tokens.py / test_auth_gate.py / test_auth_routes.py: authentication
# - test_pipeline.py: CORS, request IDs and the terminal error handler
# - test_session_routes.py / test_question_routes.py / test_ai_routes.py: API
# - test_services.py / test_supabase_client.py: database layer
# - test_interview_coach.py: the OpenAI-backed agent
#
# Run tests with: pytest
# =============================================================================
