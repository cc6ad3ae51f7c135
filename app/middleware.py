# =============================================================================
# app/middleware.py - Request Pipeline
# =============================================================================
# The request pipeline is an explicit, ordered list of stages. Each stage is
# a Starlette middleware plus a function that builds its options from the
# Settings. install_pipeline() adds them so the first stage in the list is
# the outermost one:
#
#   Request -> [CORS] -> [Request context + error boundary] -> routers
#
# JSON body and cookie parsing are done by FastAPI/Starlette per route.
# The error boundary turns anything that escapes a route into the standard
# envelope, inside CORS, so error responses still carry CORS headers.
# =============================================================================

import logging
import re
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.config import Settings
from app.exceptions import error_to_response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def _clean_request_id(value: str | None) -> str:
    """Keep a caller-supplied request ID if it is safe, else generate one."""
    candidate = (value or "").strip()
    if candidate and SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class CredentialedCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware that only sends Access-Control-Allow-Credentials to
    allowed origins.

    The stock middleware adds the header to every CORS response, including
    rejected preflights and simple requests from unknown origins.
    """

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self.allow_credentials = bool(kwargs.get("allow_credentials", False))
        self.simple_headers.pop("Access-Control-Allow-Credentials", None)
        self.preflight_headers.pop("Access-Control-Allow-Credentials", None)

    def allow_explicit_origin(self, headers, origin: str) -> None:
        super().allow_explicit_origin(headers, origin)
        if self.allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"

    def preflight_response(self, request_headers) -> Response:
        response = super().preflight_response(request_headers)
        if self.allow_credentials and self.is_allowed_origin(origin=request_headers.get("origin", "")):
            response.headers["Access-Control-Allow-Credentials"] = "true"
        return response


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Per-request bookkeeping and the pipeline's error boundary.

    - Stores a sanitized X-Request-ID in request.state.request_id and
      echoes it on the response
    - Logs method, path, status and duration
    - Converts exceptions that escaped every route handler into the
      envelope (500 unless the exception carries a status code)
    """

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _clean_request_id(request.headers.get(self.header_name))
        request.state.request_id = request_id
        start = time.monotonic()

        try:
            response = await call_next(request)
        except Exception as exc:
            response = error_to_response(exc)

        duration_ms = (time.monotonic() - start) * 1000
        response.headers.setdefault(self.header_name, request_id)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.1f}ms) request_id={request_id}"
        )
        return response


# =============================================================================
# Pipeline Definition
# =============================================================================

@dataclass(frozen=True)
class PipelineStage:
    """One middleware stage: its class and how to build its options."""

    name: str
    middleware: type
    options: Callable[[Settings], dict[str, Any]]


def _cors_options(settings: Settings) -> dict[str, Any]:
    # Only the configured frontend origin(s) may send credentialed requests
    return {
        "allow_origins": settings.cors_origins_list,
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }


def _request_context_options(settings: Settings) -> dict[str, Any]:
    return {"header_name": REQUEST_ID_HEADER}


# Outermost first
PIPELINE_STAGES: tuple[PipelineStage, ...] = (
    PipelineStage("cors", CredentialedCORSMiddleware, _cors_options),
    PipelineStage("request_context", RequestContextMiddleware, _request_context_options),
)


def install_pipeline(
    app: FastAPI,
    settings: Settings,
    stages: tuple[PipelineStage, ...] = PIPELINE_STAGES,
) -> None:
    """
    Add the pipeline stages to the app in order.

    add_middleware() wraps everything added before it, so stages are added
    last-to-first to make stages[0] the outermost.
    """
    for stage in reversed(stages):
        app.add_middleware(stage.middleware, **stage.options(settings))

    logger.debug(f"Request pipeline: {' -> '.join(stage.name for stage in stages)}")
