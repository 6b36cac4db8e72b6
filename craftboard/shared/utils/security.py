"""
Security Utilities

JWT access tokens for OAuth-authenticated users.

Sign-in itself happens at the OAuth provider; after the callback the API
issues its own short bearer token carrying the user id. Roles are NOT put in
the token: they are read from the user row on each request.

Usage:
======
    from craftboard.shared.utils.security import SecurityUtils

    token = SecurityUtils.create_access_token(
        data={"user_id": str(user.id)},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(hours=1),
    )

    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt


class SecurityUtils:
    """JWT token creation and validation."""

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create JWT access token.

        Args:
            data: Payload data to encode (``user_id`` at minimum)
            secret_key: Secret key for signing
            expires_delta: Token lifetime (default: 7 days)
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(days=7))

        to_encode.update({
            "exp": expire,
            "iat": now,
        })

        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify JWT token.

        Raises:
            ValueError: If token is expired or invalid
        """
        try:
            return jwt.decode(
                token,
                secret_key,
                algorithms=[algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
