"""
Test helper functions and factory methods for the CMS gateway.
"""

from typing import Any, Dict, List, Optional

from shared.config import GatewayConfig

TEST_API_KEY = "test-api-key"
TEST_WP_BASEURL = "http://wp.test"
TEST_WP_API_ROOT = f"{TEST_WP_BASEURL}/wp-json/wp/v2"
TEST_WP_USER = "editor"
TEST_WP_APP_PASSWORD = "abcd efgh ijkl mnop"


def make_config(**overrides: Any) -> GatewayConfig:
    """Gateway configuration with every relevant field pinned.

    Explicit values keep stray environment variables from leaking into tests.
    """
    values: Dict[str, Any] = {
        "env": "test",
        "log_level": "warning",
        "api_key": TEST_API_KEY,
        "wp_baseurl": TEST_WP_BASEURL,
        "wp_user": TEST_WP_USER,
        "wp_app_password": TEST_WP_APP_PASSWORD,
        "relay_upstream_status": False,
        "upstream_timeout": None,
    }
    values.update(overrides)
    return GatewayConfig(**values)


def wp_url(path: str) -> str:
    """Absolute URL of a REST path under the test site."""
    return f"{TEST_WP_API_ROOT}{path}"


def auth_headers(api_key: Optional[str] = TEST_API_KEY) -> Dict[str, str]:
    """Inbound headers carrying the shared secret."""
    if api_key is None:
        return {}
    return {"x-api-key": api_key}


class WordPressFactory:
    """Factory for WordPress REST payloads."""

    @staticmethod
    def post(post_id: int = 1, title: str = "Hello world", status: str = "publish") -> Dict[str, Any]:
        return {
            "id": post_id,
            "status": status,
            "title": {"rendered": title},
            "content": {"rendered": f"<p>{title}</p>"},
            "link": f"{TEST_WP_BASEURL}/?p={post_id}",
        }

    @staticmethod
    def posts(count: int = 3) -> List[Dict[str, Any]]:
        return [WordPressFactory.post(post_id=i, title=f"Post {i}") for i in range(1, count + 1)]

    @staticmethod
    def category(category_id: int = 1, name: str = "News") -> Dict[str, Any]:
        return {
            "id": category_id,
            "name": name,
            "slug": name.lower().replace(" ", "-"),
            "count": 0,
        }

    @staticmethod
    def media(media_id: int = 10, filename: str = "upload.jpg") -> Dict[str, Any]:
        return {
            "id": media_id,
            "media_type": "image",
            "source_url": f"{TEST_WP_BASEURL}/wp-content/uploads/{filename}",
        }

    @staticmethod
    def error(code: str = "rest_post_invalid_id", message: str = "Invalid post ID.", status: int = 404) -> Dict[str, Any]:
        return {"code": code, "message": message, "data": {"status": status}}
