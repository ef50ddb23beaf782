"""
Shared-secret admission control for the CMS gateway.
"""

import hmac
from enum import Enum
from typing import Optional

API_KEY_HEADER = "x-api-key"


class GateDecision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class ApiKeyGatekeeper:
    """Compares the caller's ``x-api-key`` header with one configured secret.

    An empty configured secret denies every request, including requests that
    send no header at all.
    """

    def __init__(self, secret: Optional[str]):
        self._secret = (secret or "").encode("utf-8")

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def evaluate(self, presented: Optional[str]) -> GateDecision:
        if not self._secret or presented is None:
            return GateDecision.DENY
        if hmac.compare_digest(presented.encode("utf-8"), self._secret):
            return GateDecision.ALLOW
        return GateDecision.DENY
