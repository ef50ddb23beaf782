"""
Adapters package for the CMS gateway.

Contains the HTTP client for the WordPress REST API. The adapter owns the
upstream base URL and credential, and maps transport failures to shared
errors. No retries and no circuit breaking.
"""

from .wordpress_client import UpstreamResponse, WordPressClient

__all__ = [
    "UpstreamResponse",
    "WordPressClient",
]
