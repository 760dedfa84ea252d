"""
Response models for the Weekend Vibes events proxy.

Event records themselves have no model: they are passed through to the browser
exactly as the upstream model produced them.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Error Bodies
# =============================================================================


MISSING_CREDENTIAL_ERROR = "Server Error: upstream API key not configured."
MISSING_CREDENTIAL_MESSAGE = "請確認您已在部署環境變數中設定 UPSTREAM_API_KEY（或 GEMINI_API_KEY）。"
INTERNAL_ERROR = "Failed to process request due to internal error."
PARSING_FAILED_ERROR = "Upstream response parsing failed."
METHOD_NOT_ALLOWED_ERROR = "Method not allowed."


class ErrorResponse(BaseModel):
    """Structured error body returned on failure paths."""

    error: str = Field(..., description="Fixed string identifying the failure")
    message: Optional[str] = Field(None, description="Human-readable remediation")

    def to_body(self) -> dict[str, Any]:
        """Serialize without the optional fields that are unset."""
        return self.model_dump(exclude_none=True)
