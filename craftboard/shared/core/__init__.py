"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions
- The permission engine

Usage:
======
    from craftboard.shared.core.logging import logger, get_logger
    from craftboard.shared.core.exceptions import CraftboardException, NotFoundError
    from craftboard.shared.core.permissions import Principal, can_edit

    logger.info("Starting operation", principal_id=principal.id)
"""

from craftboard.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from craftboard.shared.core.exceptions import (
    CraftboardException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ContentNotFoundError,
    ReplyNotFoundError,
    UserNotFoundError,
    ValidationError,
    ConflictError,
    RateLimitError,
    TransientStorageError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "CraftboardException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ContentNotFoundError",
    "ReplyNotFoundError",
    "UserNotFoundError",
    "ValidationError",
    "ConflictError",
    "RateLimitError",
    "TransientStorageError",
]
