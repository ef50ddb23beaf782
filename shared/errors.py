"""
Shared error handling for the CMS gateway.

Every error leaves the gateway as ``{"error": <message>}`` with the status
code carried by the exception.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str


class GatewayException(Exception):
    """Base exception for gateway errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(error=self.message)


class ForbiddenError(GatewayException):
    """Missing or incorrect shared secret."""

    status_code = 403

    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class UnknownActionError(GatewayException):
    """Action or tool name outside the supported set."""

    status_code = 400

    def __init__(self, message: str = "Unknown action", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class MissingParameterError(GatewayException):
    """A parameter needed to build the outbound request is absent."""

    status_code = 400

    def __init__(self, parameter: str, details: Optional[Dict[str, Any]] = None):
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}", details)


class InvalidRequestError(GatewayException):
    """Inbound body could not be parsed into an action request."""

    status_code = 400

    def __init__(self, message: str = "Invalid request", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class UpstreamError(GatewayException):
    """Transport-level failure talking to WordPress or a media source."""

    status_code = 500

    def __init__(self, message: str = "Upstream error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
