"""
Shared fixtures for CMS gateway tests.
"""

import pytest
import respx
from fastapi.testclient import TestClient

from service_cms_gateway.app.main import GatewayService
from shared.test_helpers import make_config


@pytest.fixture
def config():
    """Gateway configuration pointing at the fake WordPress site."""
    return make_config()


@pytest.fixture
def service(config):
    """GatewayService built from the test configuration."""
    return GatewayService(config)


@pytest.fixture
def client(service):
    """Test client for the gateway app."""
    return TestClient(service.app)


@pytest.fixture
def wp_mock():
    """Intercept every outbound httpx call; unmatched calls fail the test."""
    with respx.mock(assert_all_called=False) as router:
        yield router
