"""
Structured logging for the CMS gateway.

Log lines are JSON on stdout. Logger names follow ``<service>.<component>``
and every line emitted while a request is in flight carries its request ID.
"""

import sys
import logging
import uuid
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog

request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


def _service_from_logger_name(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    service, _, component = event_dict.get("logger", "").partition(".")
    if component:
        event_dict["service"] = service
    return event_dict


def _request_id(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    _service_from_logger_name,
    _request_id,
    structlog.processors.JSONRenderer(),
]


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Route structlog through stdlib logging at ``log_level``."""
    structlog.configure(
        processors=PROCESSORS,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


def set_request_id(request_id: Optional[str] = None) -> str:
    """Bind a request ID (generated when absent) to the current context."""
    request_id = request_id or str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


def clear_context():
    request_id_var.set(None)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
