"""
Authentication helpers for the CMS gateway.
"""

from .api_key import API_KEY_HEADER, ApiKeyGatekeeper, GateDecision

__all__ = [
    "API_KEY_HEADER",
    "ApiKeyGatekeeper",
    "GateDecision",
]
