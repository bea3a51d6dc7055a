"""
Lemon Error Types
Request and upstream LLM failures, each carrying the HTTP status it maps to
"""

from typing import Optional

from fastapi import status


class LemonError(Exception):
    """Base class for errors rendered as ``{"error": message}`` responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(LemonError):
    """Missing or malformed required request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UpstreamAuthError(LemonError):
    """LLM credentials are missing or were rejected."""

    # Credential problems are ours, not the caller's
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "LLM service is not configured correctly"


class UpstreamRateLimited(LemonError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "LLM service is busy, please try again later"


class UpstreamUnavailable(LemonError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "LLM service is unavailable"


class UnknownUpstreamError(LemonError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "LLM service error"
