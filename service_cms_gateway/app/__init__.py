"""
CMS Gateway service package.

The gateway fronts a WordPress site's REST API, enforcing:
- Admission: a single shared secret in the ``x-api-key`` header
- Translation: one action name -> one outbound REST call
- Relay: the upstream body goes back to the caller unchanged

Structure:
- app.main: FastAPI app, routes, and middleware wiring.
- app.adapters: HTTP client for the WordPress REST API.
- app.auth: Shared-secret gatekeeper.
- app.domain: Action catalogue and translator.
"""
