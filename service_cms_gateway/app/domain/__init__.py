"""
Domain layer for the CMS gateway.

Holds the closed action catalogue (action -> outbound request template,
discovery manifest). The translator that issues the call and relays the
upstream reply lives in ``domain.translator``; it depends on the adapters,
so it is not re-exported here.
"""

from .actions import Action, OutboundRequest, build_outbound_request, parse_action, tool_manifest

__all__ = [
    "Action",
    "OutboundRequest",
    "build_outbound_request",
    "parse_action",
    "tool_manifest",
]
