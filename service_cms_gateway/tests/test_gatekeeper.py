"""
Unit tests for the shared-secret gatekeeper.
"""

import pytest

from service_cms_gateway.app.auth import ApiKeyGatekeeper, GateDecision


class TestApiKeyGatekeeper:
    """Test cases for ApiKeyGatekeeper."""

    @pytest.fixture
    def gatekeeper(self):
        return ApiKeyGatekeeper("s3cret")

    def test_exact_match_allows(self, gatekeeper):
        assert gatekeeper.evaluate("s3cret") is GateDecision.ALLOW

    @pytest.mark.parametrize("presented", [None, "", "S3CRET", "s3cret ", "s3cre", "s3crets"])
    def test_anything_else_denies(self, gatekeeper, presented):
        assert gatekeeper.evaluate(presented) is GateDecision.DENY

    @pytest.mark.parametrize("secret", [None, ""])
    def test_unconfigured_secret_fails_closed(self, secret):
        gatekeeper = ApiKeyGatekeeper(secret)
        assert gatekeeper.configured is False
        assert gatekeeper.evaluate(None) is GateDecision.DENY
        assert gatekeeper.evaluate("") is GateDecision.DENY
        assert gatekeeper.evaluate("anything") is GateDecision.DENY

    def test_non_ascii_header_denies(self, gatekeeper):
        assert gatekeeper.evaluate("sécret") is GateDecision.DENY
