"""
Logging configuration shared by the bonus claims services.

Structured JSON output on stdout (collected by the awslogs driver) with the
service name and request correlation ID on every event.
"""

import logging
import sys
from contextvars import ContextVar
from uuid import uuid4

import structlog

# Context variable for request correlation
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """
    Configure structured logging for a service.

    Args:
        service_name: Name of the service for log context
        level: Standard logging level name
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_service_name(service_name),
            _add_correlation_id,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def _add_service_name(service_name: str):
    """Processor to add service name to all logs."""

    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict

    return processor


def _add_correlation_id(logger, method_name, event_dict):
    """Processor to add correlation ID if present."""
    cid = correlation_id.get()
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def get_correlation_id() -> str:
    """Get current correlation ID or generate new one."""
    cid = correlation_id.get()
    if not cid:
        cid = str(uuid4())
        correlation_id.set(cid)
    return cid


def set_correlation_id(cid: str) -> None:
    """Set correlation ID for current context."""
    correlation_id.set(cid)
