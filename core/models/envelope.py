# =============================================================================
# core/models/envelope.py - Response Envelope
# =============================================================================
# Every JSON response the API produces has the same shape:
#
#   {"success": true,  "message": "",             "data": {...}}
#   {"success": false, "message": "Token expired", "data": null}
#
# The validator below refuses a failed envelope that carries data, so a
# handler cannot accidentally leak a payload alongside an error.
# =============================================================================

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """
    Uniform response wrapper.

    Example:
        Envelope[SessionOut](success=True, data=session)
        Envelope(success=False, message="Session not found")
    """

    success: bool = Field(..., description="Whether the request succeeded")
    message: str = Field(default="", description="Error text or informational note")
    data: T | None = Field(default=None, description="Payload (always null on failure)")

    @model_validator(mode="after")
    def _failed_envelope_has_no_data(self) -> "Envelope[T]":
        if not self.success and self.data is not None:
            raise ValueError("a failed envelope must not carry data")
        return self


def success_envelope(data: Any, message: str = "") -> dict[str, Any]:
    """Build a success envelope as a plain dict (for returning from routes)."""
    return {"success": True, "message": message, "data": data}


def error_envelope(message: str) -> dict[str, Any]:
    """Build a failure envelope as a plain dict."""
    return {"success": False, "message": message, "data": None}
