"""
Custom exceptions for the Weekend Vibes events proxy.

Every failure the gateway knows how to turn into an HTTP response is one of
these; anything else raised by the upstream SDK is wrapped in UpstreamCallError.
"""

from typing import Any, Optional


class WeekendVibesException(Exception):
    """Base exception for all Weekend Vibes errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(WeekendVibesException):
    """Configuration error."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Required configuration missing."""

    def __init__(self, config_name: str) -> None:
        """Initialize with config name."""
        message = f"Required configuration '{config_name}' is missing"
        super().__init__(message, {"config_name": config_name})
        self.config_name = config_name


# =============================================================================
# Upstream Exceptions
# =============================================================================


class UpstreamError(WeekendVibesException):
    """Base exception for the generative search collaborator."""

    pass


class UpstreamCallError(UpstreamError):
    """The upstream call failed (network, authentication, quota, timeout)."""

    def __init__(self, model: str, error: BaseException) -> None:
        """Initialize with the model and the underlying error."""
        message = f"Upstream call to '{model}' failed: {type(error).__name__}: {error}"
        super().__init__(message, {"model": model, "error_type": type(error).__name__})
        self.model = model
        self.error = error


class EmptyUpstreamResponseError(UpstreamError):
    """The upstream call succeeded but returned no text."""

    def __init__(self, model: str) -> None:
        """Initialize with the model name."""
        super().__init__(f"Upstream model '{model}' returned no text", {"model": model})


# =============================================================================
# Extraction Exceptions
# =============================================================================


class ExtractionError(WeekendVibesException):
    """Base exception for JSON array extraction."""

    pass


class NoArrayFoundError(ExtractionError):
    """The text contains no [...] span at all."""

    def __init__(self, text: str) -> None:
        """Initialize with the cleaned text that was searched."""
        super().__init__("Response does not contain a JSON array pattern", {"length": len(text)})
        self.text = text


class MalformedJSONError(ExtractionError):
    """A [...] span was found but is not valid JSON."""

    def __init__(self, raw_snippet: str, reason: str) -> None:
        """Initialize with the offending substring and parser message."""
        super().__init__(f"Failed to parse JSON array: {reason}", {"length": len(raw_snippet)})
        self.raw_snippet = raw_snippet
        self.reason = reason
