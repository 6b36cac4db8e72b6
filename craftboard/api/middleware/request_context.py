"""
Request Context Middleware

Binds a request id (the caller's ``X-Request-ID`` or a fresh UUID) into the
structlog context so every log line of one request can be correlated, and
echoes it back in the response header.
"""

import uuid

from fastapi import FastAPI, Request

from craftboard.shared.core.logging import clear_log_context, log_context


REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_context(app: FastAPI) -> None:
    """Register the request-id middleware on ``app``."""

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        clear_log_context()
        log_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
