"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    CraftboardException (base)
       │
       ├── AuthenticationError (401)      ← No principal where one is required
       ├── AuthorizationError (403)       ← Principal lacks the capability
       ├── NotFoundError (404)            ← Absent, soft-deleted, or hidden draft
       │      ├── ContentNotFoundError
       │      ├── ReplyNotFoundError
       │      └── UserNotFoundError
       ├── ValidationError (400)          ← Malformed or out-of-range input
       ├── ConflictError (409)            ← Slug collision that survived disambiguation
       ├── RateLimitError (429)           ← Too many requests
       └── TransientStorageError (500)    ← Database timeout / connection failure

Usage:
======
    from craftboard.shared.core.exceptions import ContentNotFoundError, AuthorizationError

    raise ContentNotFoundError("forum", slug)
    # {"success": false, "error": "Forum post 'hello-world' not found", "code": "NOT_FOUND"}

Exception Handling:
===================
    Exceptions are raised by services and repositories and converted to the
    response envelope by api/middleware/error_handler.py:
    {
        "success": false,
        "error": "You do not have permission to edit this post",
        "code": "AUTHORIZATION_ERROR",
        "details": {}
    }
"""

from typing import Any, Optional


class CraftboardException(Exception):
    """
    Base exception for all Craftboard application errors.

    Attributes:
        message: Human-readable error message (safe to show to clients)
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context (safe to show to clients)
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to the API error envelope.

        Returns:
            Dictionary for the JSON response body
        """
        body: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(CraftboardException):
    """
    Authentication required (401 Unauthorized).

    Raised when:
    - A route requires a principal and none was supplied
    - The bearer token is expired or malformed
    - The token references a user that no longer exists
    """

    def __init__(
        self,
        message: str = "Authentication required",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(CraftboardException):
    """
    Permission denied (403 Forbidden).

    Raised when the principal is known but the permission engine refused.
    """

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(CraftboardException):
    """
    Resource not found error (404 Not Found).

    On read paths a hidden draft raises the same error as a missing row, so
    the message never says which of the two happened.

    Example:
        raise NotFoundError("User", user_id)
        # Message: "User 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


# Display names used in not-found messages
RESOURCE_NAMES = {
    "forum": "Forum post",
    "blog": "Blog post",
    "wiki": "Wiki guide",
    "dex": "Monster",
}


class ContentNotFoundError(NotFoundError):
    """Content item not found (or not visible to the caller)."""

    def __init__(self, module: str, slug: str) -> None:
        super().__init__(resource=RESOURCE_NAMES.get(module, "Content"), resource_id=slug)


class ReplyNotFoundError(NotFoundError):
    """Forum reply not found error."""

    def __init__(self, reply_id: str) -> None:
        super().__init__(resource="Reply", resource_id=reply_id)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        super().__init__(resource="User", resource_id=user_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(CraftboardException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation beyond what the request schema
    can express (unknown module, helpful on a non-wiki item, ...).
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class ConflictError(CraftboardException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Slug 'hello-world' is already taken")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# RATE LIMITING & STORAGE ERRORS (429, 500)
# ═══════════════════════════════════════════════════════════════════════════════


class RateLimitError(CraftboardException):
    """
    Rate limit exceeded error (429 Too Many Requests).

    Includes retryAfter hint for clients.
    """

    def __init__(
        self,
        message: str = "Too many requests",
        retry_after: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        if retry_after:
            extra_details["retryAfter"] = retry_after
        self.retry_after = retry_after
        super().__init__(
            message=message,
            status_code=429,
            error_code="RATE_LIMIT_EXCEEDED",
            details=extra_details,
        )


class TransientStorageError(CraftboardException):
    """
    Storage timeout or connection failure (500).

    Safe for the caller to retry with backoff. The message is deliberately
    generic; the underlying driver error is only logged.
    """

    def __init__(
        self,
        message: str = "A temporary storage error occurred, please retry",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="TRANSIENT_STORAGE_ERROR",
            details=details,
        )
