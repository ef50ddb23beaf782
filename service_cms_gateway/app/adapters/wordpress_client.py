"""
WordPress REST client for the CMS gateway.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from shared.logging import get_logger
from shared.errors import UpstreamError
from ..domain.actions import OutboundRequest

_NOT_JSON = object()


@dataclass(frozen=True)
class UpstreamResponse:
    """Opaque upstream reply: status, raw body and parsed JSON when it parses."""

    status_code: int
    content: bytes
    content_type: Optional[str]
    data: Any = _NOT_JSON

    @property
    def is_json(self) -> bool:
        return self.data is not _NOT_JSON

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "UpstreamResponse":
        try:
            data = json.loads(response.content)
        except ValueError:
            data = _NOT_JSON
        return cls(
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("Content-Type"),
            data=data,
        )


class WordPressClient:
    """Issues outbound calls against ``{base}/wp-json/wp/v2``.

    The Basic credential is computed once by the caller and never changes.
    No retries: every transport failure surfaces as ``UpstreamError``.
    """

    def __init__(self, api_root: str, auth_header: str, timeout: Optional[float] = None):
        self.api_root = api_root.rstrip('/')
        self._auth_header = auth_header
        self.timeout = timeout
        self.logger = get_logger("cms_gateway.wordpress_client")

    def url_for(self, path: str) -> str:
        return f"{self.api_root}{path}"

    async def send(self, outbound: OutboundRequest) -> UpstreamResponse:
        """Issue one outbound request and return the upstream reply as-is."""
        url = self.url_for(outbound.path)
        headers = {"Authorization": self._auth_header, **outbound.headers}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    outbound.method,
                    url,
                    params=outbound.params or None,
                    headers=headers,
                    json=outbound.json,
                    content=outbound.content,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.error(
                "WordPress request failed",
                method=outbound.method,
                url=url,
                error=str(e)
            )
            raise UpstreamError(
                str(e) or type(e).__name__,
                details={"method": outbound.method, "url": url}
            )

        self.logger.info(
            "WordPress request completed",
            method=outbound.method,
            url=url,
            status_code=response.status_code
        )
        return UpstreamResponse.from_httpx(response)

    async def fetch_source(self, source_url: str) -> bytes:
        """Download a media source into memory.

        Non-2xx replies count as failures so that an error page is never
        uploaded as media.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(source_url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.error("Media source fetch failed", url=source_url, error=str(e))
            raise UpstreamError(
                str(e) or type(e).__name__,
                details={"url": source_url}
            )

        self.logger.info(
            "Media source fetched",
            url=source_url,
            size_bytes=len(response.content)
        )
        return response.content
