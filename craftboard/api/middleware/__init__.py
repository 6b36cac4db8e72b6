"""
API Middleware

Components:
===========
- error_handler: Global exception handling into the error envelope
- request_context: Request id bound into every log line

Usage:
======
    from craftboard.api.middleware import setup_exception_handlers, setup_request_context

    app = FastAPI()
    setup_request_context(app)
    setup_exception_handlers(app)
"""

from craftboard.api.middleware.error_handler import setup_exception_handlers
from craftboard.api.middleware.request_context import setup_request_context

__all__ = [
    "setup_exception_handlers",
    "setup_request_context",
]
