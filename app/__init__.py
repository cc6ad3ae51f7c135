# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: create_app(), lifespan, router mounting
# - config.py: Environment variable loading and settings
# - middleware.py: The ordered request pipeline (CORS, request context)
# - exceptions.py: Error classes and the terminal error handlers
# - auth/: Token issuing, the auth gate and /api/auth routes
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ and agents/ packages.
# =============================================================================

# Reported by /, /api/health and the OpenAPI schema
API_VERSION = "1.0.0"
