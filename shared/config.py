"""
Shared configuration management for the CMS gateway.
"""

import base64
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Listener
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)


class GatewayConfig(BaseConfig):
    """Gateway configuration: shared secret and WordPress upstream."""

    # Admission control
    api_key: str = Field(default="")

    # WordPress upstream
    wp_baseurl: str = Field(default="")
    wp_user: str = Field(default="")
    wp_app_password: str = Field(default="")

    # Relay behaviour
    relay_upstream_status: bool = Field(default=False)
    upstream_timeout: Optional[float] = Field(default=None)

    @property
    def wp_api_root(self) -> str:
        """REST namespace root on the upstream site."""
        return f"{self.wp_baseurl.rstrip('/')}/wp-json/wp/v2"

    @property
    def wp_auth_header(self) -> str:
        """HTTP Basic credential for the upstream, empty values included."""
        raw = f"{self.wp_user}:{self.wp_app_password}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")


def get_config() -> GatewayConfig:
    """Load gateway configuration from the environment."""
    return GatewayConfig()
