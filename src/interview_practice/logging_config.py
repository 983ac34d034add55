"""Structured logging configuration using structlog.

Provides JSON output for production (parseable by ELK, Loki, CloudWatch)
and pretty console output for development.

The Gemini API key travels as the ``key`` query parameter, so every event
passes through ``redact_api_key`` before rendering. That covers URLs
embedded in httpx error text and tracebacks as well as records emitted by
third-party stdlib loggers.
"""

import logging
import re
import sys
from typing import Any

import structlog
from structlog.types import EventDict, WrappedLogger

REDACTED = "[REDACTED]"

_KEY_PARAM = re.compile(r"([?&]key=)[^&#\s\"'<>]+", re.IGNORECASE)


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add application context to all log events."""
    event_dict["app"] = "interview-practice-api"
    return event_dict


def _redact(value: Any) -> Any:
    if isinstance(value, str):
        return _KEY_PARAM.sub(rf"\1{REDACTED}", value)
    if isinstance(value, dict):
        return {k: _redact(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(_redact(v) for v in value)
    return value


def redact_api_key(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask ``key=`` query parameter values in every string of the event.

    >>> redact_api_key(None, "info", {"event": "GET /v1beta/models?key=abc&alt=json"})
    {'event': 'GET /v1beta/models?key=[REDACTED]&alt=json'}
    """
    for name, value in event_dict.items():
        # Internal bookkeeping (the stdlib LogRecord) is left alone
        if not name.startswith("_"):
            event_dict[name] = _redact(value)
    return event_dict


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Configure structlog for structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment name (development, production)

    In production mode:
        - JSON output for machine parsing
        - ISO timestamps

    In development mode:
        - Pretty colored console output

    Both modes render exceptions to text before redaction, so tracebacks
    never carry the API key.
    """
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_app_context,
        redact_api_key,
    ]

    is_production = environment.lower() == "production"

    if is_production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        # Exceptions arrive pre-rendered (and redacted) by format_exc_info
        renderer = structlog.dev.ConsoleRenderer(
            colors=True, exception_formatter=structlog.dev.plain_traceback
        )

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level_int)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
