"""
CMS gateway service: authenticated relay to the WordPress REST API.

Three inbound shapes share one translator:

- ``POST /mcp``: generic dispatch, ``{action|tool, params|args}``
- ``POST /mcp/call`` + ``GET /mcp/tools``: tool call and discovery manifest
- ``/wp/...``: resource routes
"""

from typing import Any, Dict, Optional

from fastapi import Body, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from shared.base_service import BaseService
from shared.config import GatewayConfig, get_config
from shared.errors import ForbiddenError, UnknownActionError
from .adapters.wordpress_client import WordPressClient
from .auth.api_key import API_KEY_HEADER, ApiKeyGatekeeper, GateDecision
from .domain.actions import Action, parse_action, tool_manifest
from .domain.translator import ActionTranslator


class DispatchRequest(BaseModel):
    """Body of ``POST /mcp``. Either naming convention is accepted."""

    action: Optional[str] = None
    tool: Optional[str] = None
    params: Optional[Dict[str, Any]] = None
    args: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> Optional[str]:
        return self.action if self.action is not None else self.tool

    @property
    def arguments(self) -> Dict[str, Any]:
        if self.params is not None:
            return self.params
        return self.args or {}


class ToolCall(BaseModel):
    """Body of ``POST /mcp/call``."""

    tool: str
    args: Dict[str, Any] = Field(default_factory=dict)


class GatewayService(BaseService):
    """CMS gateway service implementation."""

    def __init__(self, config: Optional[GatewayConfig] = None):
        super().__init__("cms_gateway", config or get_config())

        self.wordpress_client = WordPressClient(
            self.config.wp_api_root,
            self.config.wp_auth_header,
            timeout=self.config.upstream_timeout,
        )
        self.translator = ActionTranslator(
            self.wordpress_client,
            self.metrics,
            relay_upstream_status=self.config.relay_upstream_status,
        )

        if not self.gatekeeper.configured:
            self.logger.warning("API_KEY is not set; every protected request will be rejected")
        if not self.config.wp_baseurl:
            self.logger.warning("WP_BASEURL is not set; upstream calls will fail")

        self._setup_mcp_routes()
        self._setup_wordpress_routes()

        self.app.state.gateway_service = self

    def _setup_admission(self):
        """Reject requests without the shared secret before routing or body parsing."""
        self.gatekeeper = ApiKeyGatekeeper(self.config.api_key)
        public_paths = self.public_paths

        @self.app.middleware("http")
        async def enforce_api_key(request: Request, call_next):
            if request.url.path in public_paths:
                return await call_next(request)

            decision = self.gatekeeper.evaluate(request.headers.get(API_KEY_HEADER))
            if decision is GateDecision.DENY:
                self.metrics.record_denial()
                self.logger.warning(
                    "Request rejected by gatekeeper",
                    method=request.method,
                    path=request.url.path,
                    key_present=API_KEY_HEADER in request.headers
                )
                error = ForbiddenError()
                return JSONResponse(status_code=error.status_code, content=error.to_response().model_dump())

            return await call_next(request)

    def _setup_mcp_routes(self):
        """Generic dispatch and tool-call surfaces."""

        @self.app.post("/mcp")
        async def dispatch_action(body: DispatchRequest):
            """Run one action named in the body."""
            action = parse_action(body.name)
            return await self.translator.dispatch(action, body.arguments)

        @self.app.post("/mcp/call")
        async def call_tool(body: ToolCall):
            """Run one tool from the manifest."""
            action = parse_action(body.tool, UnknownActionError("Unknown tool"))
            return await self.translator.dispatch(action, body.args)

        @self.app.get("/mcp/tools")
        async def list_tools():
            """Static manifest of callable tools."""
            return {"tools": tool_manifest()}

    def _setup_wordpress_routes(self):
        """Resource-style routes mirroring the WordPress REST layout."""

        @self.app.get("/wp/posts")
        async def list_posts(exclude: Optional[str] = Query(default=None)):
            """Recent posts, or up to 100 posts without ``exclude``."""
            if exclude:
                return await self.translator.dispatch(Action.GET_POSTS_EXCLUDING, {"excludeId": exclude})
            return await self.translator.dispatch(Action.GET_RECENT_POSTS)

        @self.app.get("/wp/posts/{post_id}")
        async def get_post(post_id: int):
            return await self.translator.dispatch(Action.GET_POST, {"id": post_id})

        @self.app.post("/wp/posts")
        async def create_post(payload: Dict[str, Any] = Body(...)):
            return await self.translator.dispatch(Action.CREATE_POST, payload)

        @self.app.put("/wp/posts/{post_id}")
        async def update_post(post_id: int, payload: Dict[str, Any] = Body(...)):
            # The path id wins over any id in the body
            return await self.translator.dispatch(Action.UPDATE_POST, {**payload, "id": post_id})

        @self.app.delete("/wp/posts/{post_id}")
        async def delete_post(post_id: int):
            return await self.translator.dispatch(Action.DELETE_POST, {"id": post_id})

        @self.app.get("/wp/categories")
        async def list_categories():
            return await self.translator.dispatch(Action.GET_CATEGORIES)

        @self.app.post("/wp/categories")
        async def create_category(payload: Dict[str, Any] = Body(...)):
            return await self.translator.dispatch(Action.CREATE_CATEGORY, payload)

        @self.app.post("/wp/media")
        async def upload_media(payload: Dict[str, Any] = Body(...)):
            """Fetch ``url`` and upload it as ``filename`` (default upload.jpg)."""
            return await self.translator.dispatch(Action.UPLOAD_MEDIA, payload)


def create_app(config: Optional[GatewayConfig] = None):
    """Create FastAPI application."""
    service = GatewayService(config)
    return service.app


def main():
    service = GatewayService()
    service.run()


if __name__ == "__main__":
    main()
