"""
API Handlers

Route handlers for the Craftboard API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from craftboard.api.handlers import (
    auth_handler,
    content_handler,
    forum_handler,
    health_handler,
    interaction_handler,
    stats_handler,
)

__all__ = [
    "auth_handler",
    "content_handler",
    "forum_handler",
    "health_handler",
    "interaction_handler",
    "stats_handler",
]
