"""
Action translator: action + params -> one WordPress call -> relayed reply.
"""

from typing import Any, Mapping, Optional

from fastapi import Response

from shared.errors import UpstreamError
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..adapters.wordpress_client import UpstreamResponse, WordPressClient
from .actions import Action, JSON_CONTENT_TYPE, build_outbound_request


class ActionTranslator:
    """Builds, issues and relays the outbound call for a validated action."""

    def __init__(
        self,
        client: WordPressClient,
        metrics: MetricsCollector,
        relay_upstream_status: bool = False,
    ):
        self.client = client
        self.metrics = metrics
        self.relay_upstream_status = relay_upstream_status
        self.logger = get_logger("cms_gateway.translator")

    async def dispatch(self, action: Action, params: Optional[Mapping[str, Any]] = None) -> Response:
        """Run one action end to end.

        Missing parameters raise before any network call. For uploads the
        source is fetched first; if that fails the media endpoint is never
        contacted.
        """
        outbound = build_outbound_request(action, params)
        self.logger.debug("Dispatching action", action=action.value, method=outbound.method, path=outbound.path)

        try:
            with self.metrics.time_operation("upstream_request_duration_seconds", action=action.value):
                if outbound.source_url is not None:
                    outbound = outbound.with_content(await self.client.fetch_source(outbound.source_url))
                upstream = await self.client.send(outbound)
        except UpstreamError:
            self.metrics.record_upstream_request(action.value, "error")
            raise

        self.metrics.record_upstream_request(action.value, "ok")
        return self.relay(upstream)

    def relay(self, upstream: UpstreamResponse) -> Response:
        """Forward the upstream body unchanged.

        Unless relay_upstream_status is enabled the caller always sees 200,
        whatever WordPress answered.
        """
        status_code = upstream.status_code if self.relay_upstream_status else 200
        if upstream.is_json:
            return Response(content=upstream.content, status_code=status_code, media_type=JSON_CONTENT_TYPE)
        return Response(content=upstream.content, status_code=status_code, media_type=upstream.content_type)
