"""
Shared utilities for the CMS gateway.

This package aggregates common building blocks consumed by the service:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- base_service: FastAPI app factory with middleware and error handlers
- test_helpers: Config and payload factories for tests

Do not import from service packages into shared/.
"""
