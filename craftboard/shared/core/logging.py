"""
Logging Configuration

Structured logging setup using structlog.

Log Output:
===========
Development:
    2025-03-02 18:04:11 [info     ] Interaction toggled   module=forum slug=hello-world action=like result=added

Production (JSON):
    {"timestamp": "...", "level": "info", "event": "Interaction toggled", "module": "forum", ...}

Usage:
======
    from craftboard.shared.core.logging import logger, get_logger, log_context

    logger.info("Content created", module="blog", slug=slug)

    ledger_logger = get_logger("craftboard.ledger")
    ledger_logger.debug("Counter adjusted", field="likes_count", delta=1)

    # Bind request-scoped values (request id, principal) once per request
    log_context(request_id=request_id, principal_id=principal_id)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from craftboard.config.settings import settings


# Keys whose values never reach the log sink (bearer tokens, OAuth secrets)
REDACTED_KEYS = frozenset({"token", "access_token", "authorization", "client_secret"})


def redact_secrets(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Mask credential values that were passed as log fields."""
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def setup_logging() -> None:
    """
    Configure structured logging for the application.

    - development: colored console output
    - production / test: JSON lines, exceptions rendered into the event

    Called automatically when this module is imported.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_secrets,
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, e.g. "craftboard.ledger"

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Add context variables to all subsequent log calls of this request.

    Args:
        **kwargs: Key-value pairs to add to log context
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Clear request-scoped context variables."""
    structlog.contextvars.clear_contextvars()


# Initialize logging on module import
setup_logging()

# Default logger instance for convenient import
logger = get_logger("craftboard")
