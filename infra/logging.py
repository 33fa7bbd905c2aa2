"""
Logging configuration for the CDK app.

Same structlog pipeline the services use, except output goes to stderr:
the CDK CLI reads the synthesized assembly from cdk.out, but anything on
stdout shows up interleaved with `cdk synth` template output.
"""

import logging
import sys

import structlog


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """
    Configure structured logging for the deployment process.

    Args:
        service_name: Name added to every log event
        level: Standard logging level name
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
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
