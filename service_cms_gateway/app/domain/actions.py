"""
Action catalogue for the CMS gateway.

Each supported action maps to exactly one outbound WordPress REST call. The
mapping is a closed table keyed by ``Action``; the only way to reach an
unknown action is through a raw wire-level name, which ``parse_action``
rejects.
"""

import mimetypes
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import quote

from shared.errors import InvalidRequestError, MissingParameterError, UnknownActionError

DEFAULT_UPLOAD_FILENAME = "upload.jpg"
DEFAULT_UPLOAD_CONTENT_TYPE = "image/jpeg"
JSON_CONTENT_TYPE = "application/json"


class Action(str, Enum):
    """Supported actions, valued by their wire names."""

    GET_RECENT_POSTS = "getRecentPosts"
    GET_POST = "getPost"
    GET_POSTS_EXCLUDING = "getPostsExcluding"
    CREATE_POST = "createPost"
    UPDATE_POST = "updatePost"
    DELETE_POST = "deletePost"
    GET_CATEGORIES = "getCategories"
    CREATE_CATEGORY = "createCategory"
    UPLOAD_MEDIA = "uploadMedia"


@dataclass(frozen=True)
class OutboundRequest:
    """One call against the WordPress REST namespace.

    ``path`` is relative to ``/wp-json/wp/v2``. When ``source_url`` is set the
    body has to be fetched from it before the request can be sent.
    """

    method: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    json: Optional[Any] = None
    content: Optional[bytes] = None
    source_url: Optional[str] = None

    def with_content(self, content: bytes) -> "OutboundRequest":
        """Return a copy carrying the buffered source body."""
        return replace(self, content=content, source_url=None)


@dataclass(frozen=True)
class ActionSpec:
    """Discovery metadata for one action."""

    action: Action
    description: str
    parameters: Dict[str, str]
    required: List[str] = field(default_factory=list)

    def to_manifest(self) -> Dict[str, Any]:
        return {
            "name": self.action.value,
            "description": self.description,
            "parameters": dict(self.parameters),
            "required": list(self.required),
        }


def parse_action(name: Optional[str], error: Optional[UnknownActionError] = None) -> Action:
    """Resolve a wire-level action name."""
    try:
        return Action(name)
    except ValueError:
        raise (error or UnknownActionError()) from None


def _require(params: Mapping[str, Any], name: str) -> Any:
    value = params.get(name)
    if value is None or value == "":
        raise MissingParameterError(name)
    return value


def _path_id(params: Mapping[str, Any], name: str) -> str:
    """Required parameter quoted as exactly one path segment.

    Dot segments are removed by URL normalisation and would climb out of the
    resource path, so they are refused.
    """
    value = str(_require(params, name))
    if value in (".", ".."):
        raise InvalidRequestError(f"Invalid path parameter: {name}")
    return quote(value, safe="")


def _clean_filename(value: Any) -> str:
    """Drop quotes, backslashes and control characters from an upload name."""
    name = "".join(
        ch for ch in str(value or "")
        if ch not in '"\\' and ord(ch) >= 32 and ord(ch) != 127
    ).strip()
    return name or DEFAULT_UPLOAD_FILENAME


def _content_disposition(filename: str) -> str:
    """attachment header with an ASCII filename and, when needed, filename*."""
    fallback = filename.encode("ascii", "ignore").decode("ascii") or DEFAULT_UPLOAD_FILENAME
    header = f'attachment; filename="{fallback}"'
    if fallback != filename:
        header += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return header


def _json_request(method: str, path: str, body: Dict[str, Any]) -> OutboundRequest:
    return OutboundRequest(
        method=method,
        path=path,
        headers={"Content-Type": JSON_CONTENT_TYPE},
        json=body,
    )


def _get_recent_posts(params: Mapping[str, Any]) -> OutboundRequest:
    return OutboundRequest("GET", "/posts", params={"per_page": "10"})


def _get_post(params: Mapping[str, Any]) -> OutboundRequest:
    return OutboundRequest("GET", f"/posts/{_path_id(params, 'id')}")


def _get_posts_excluding(params: Mapping[str, Any]) -> OutboundRequest:
    exclude_id = _require(params, "excludeId")
    return OutboundRequest(
        "GET",
        "/posts",
        params={"exclude": str(exclude_id), "per_page": "100"},
    )


def _create_post(params: Mapping[str, Any]) -> OutboundRequest:
    return _json_request("POST", "/posts", dict(params))


def _update_post(params: Mapping[str, Any]) -> OutboundRequest:
    post_id = _path_id(params, "id")
    body = {key: value for key, value in params.items() if key != "id"}
    return _json_request("PUT", f"/posts/{post_id}", body)


def _delete_post(params: Mapping[str, Any]) -> OutboundRequest:
    return OutboundRequest(
        "DELETE",
        f"/posts/{_path_id(params, 'id')}",
        params={"force": "true"},
    )


def _get_categories(params: Mapping[str, Any]) -> OutboundRequest:
    return OutboundRequest("GET", "/categories")


def _create_category(params: Mapping[str, Any]) -> OutboundRequest:
    return _json_request("POST", "/categories", dict(params))


def _upload_media(params: Mapping[str, Any]) -> OutboundRequest:
    source_url = str(_require(params, "url"))
    filename = _clean_filename(params.get("filename"))
    content_type, _ = mimetypes.guess_type(filename)
    return OutboundRequest(
        "POST",
        "/media",
        headers={
            "Content-Disposition": _content_disposition(filename),
            "Content-Type": content_type or DEFAULT_UPLOAD_CONTENT_TYPE,
        },
        source_url=source_url,
    )


BUILDERS: Dict[Action, Callable[[Mapping[str, Any]], OutboundRequest]] = {
    Action.GET_RECENT_POSTS: _get_recent_posts,
    Action.GET_POST: _get_post,
    Action.GET_POSTS_EXCLUDING: _get_posts_excluding,
    Action.CREATE_POST: _create_post,
    Action.UPDATE_POST: _update_post,
    Action.DELETE_POST: _delete_post,
    Action.GET_CATEGORIES: _get_categories,
    Action.CREATE_CATEGORY: _create_category,
    Action.UPLOAD_MEDIA: _upload_media,
}


def build_outbound_request(action: Action, params: Optional[Mapping[str, Any]] = None) -> OutboundRequest:
    """Map an action and its parameters to the outbound request template."""
    return BUILDERS[action](params or {})


_POST_FIELDS = {
    "title": "string",
    "content": "string",
    "excerpt": "string",
    "status": "string",
    "categories": "array",
    "tags": "array",
    "featured_media": "integer",
}

ACTION_SPECS: List[ActionSpec] = [
    ActionSpec(Action.GET_RECENT_POSTS, "List the 10 most recent posts", {}),
    ActionSpec(Action.GET_POST, "Fetch a single post by id", {"id": "integer"}, ["id"]),
    ActionSpec(
        Action.GET_POSTS_EXCLUDING,
        "List up to 100 posts, leaving out one post",
        {"excludeId": "integer"},
        ["excludeId"],
    ),
    ActionSpec(Action.CREATE_POST, "Create a post from the supplied fields", dict(_POST_FIELDS)),
    ActionSpec(
        Action.UPDATE_POST,
        "Update the supplied fields of an existing post",
        {"id": "integer", **_POST_FIELDS},
        ["id"],
    ),
    ActionSpec(Action.DELETE_POST, "Permanently delete a post", {"id": "integer"}, ["id"]),
    ActionSpec(Action.GET_CATEGORIES, "List categories", {}),
    ActionSpec(
        Action.CREATE_CATEGORY,
        "Create a category",
        {"name": "string", "description": "string", "slug": "string", "parent": "integer"},
    ),
    ActionSpec(
        Action.UPLOAD_MEDIA,
        "Fetch a file from a URL and upload it to the media library",
        {"url": "string", "filename": "string"},
        ["url"],
    ),
]


def tool_manifest() -> List[Dict[str, Any]]:
    """Static discovery document for every callable action."""
    return [spec.to_manifest() for spec in ACTION_SPECS]
