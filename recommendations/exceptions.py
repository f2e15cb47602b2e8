"""
Custom Exceptions for the meal-plan recommendation service.

Exception Hierarchy:
    RecommendationError (base)
    ├── ConfigurationError
    ├── CompletionError
    │   ├── CompletionConnectionError
    │   ├── CompletionRateLimitError
    │   ├── CompletionAuthError
    │   └── CompletionResponseError
    └── InvalidPlanError

Usage:
    from recommendations.exceptions import InvalidPlanError, CompletionError

    try:
        response = service.generate(request)
    except InvalidPlanError as e:
        print(f"Model output could not be recovered: {e.result.status.value}")
    except CompletionError as e:
        print(f"Completion service failed: {e}")
"""

from __future__ import annotations

from typing import Optional

from recovery import RecoveryResult


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class RecommendationError(Exception):
    """
    Base exception for all recommendation-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A recommendation error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class ConfigurationError(RecommendationError):
    """Raised when required configuration (e.g. the API key) is missing."""

    def __init__(self, message: str = "Server configuration error: API key not found"):
        super().__init__(message)


# =============================================================================
# COMPLETION SERVICE ERRORS
# =============================================================================


class CompletionError(RecommendationError):
    """
    Base class for completion service errors.

    Attributes:
        original_error: The underlying SDK exception (optional)
        status_code: HTTP status code returned upstream (optional)
    """

    def __init__(
        self,
        message: str = "Completion service error",
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
    ):
        self.original_error = original_error
        self.status_code = status_code

        details = None
        if original_error:
            details = f"{type(original_error).__name__}: {original_error}"
        if status_code:
            message = f"{message} (HTTP {status_code})"

        super().__init__(message, details)


class CompletionConnectionError(CompletionError):
    """Raised when the completion endpoint cannot be reached."""

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(
            message="Failed to connect to completion service",
            original_error=original_error,
        )


class CompletionRateLimitError(CompletionError):
    """Raised when rate limits persist after all retries."""

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(
            message="Completion service rate limit exceeded",
            original_error=original_error,
            status_code=429,
        )


class CompletionAuthError(CompletionError):
    """Raised when the API key is rejected."""

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(
            message="Invalid API key. Please check server configuration.",
            original_error=original_error,
            status_code=401,
        )


class CompletionResponseError(CompletionError):
    """
    Raised when the completion response has no usable message.

    Attributes:
        response_content: Raw content, if any, for debugging
    """

    def __init__(self, message: str, response_content: Optional[str] = None):
        self.response_content = response_content
        super().__init__(message=message)


# =============================================================================
# RECOVERY ERRORS
# =============================================================================


class InvalidPlanError(RecommendationError):
    """
    Raised when the model output could not be recovered into a plan.

    Attributes:
        result: The failed RecoveryResult, with candidate and repaired text
    """

    def __init__(self, result: RecoveryResult):
        self.result = result
        super().__init__(
            "AI service returned invalid JSON format. The response was truncated.",
            details=f"{result.status.value}: {result.error}",
        )
