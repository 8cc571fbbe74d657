"""
Signed identity tokens.

Tokens are HS256 JWTs signed with the process-wide SECRET_KEY. They carry
the username, the admin flag and the issue time.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional
from jose import jwt
from jobly.core.config import settings


def create_token(user: Mapping[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed token for a user.

    Args:
        user: Mapping with "username" and optionally "isAdmin" or "is_admin"
            (defaults to False)
        expires_delta: Optional lifetime; tokens never expire unless given

    Returns:
        Encoded JWT token as a string
    """
    is_admin = user.get("isAdmin", user.get("is_admin", False))
    issued_at = datetime.now(timezone.utc)

    payload = {
        "username": user["username"],
        "isAdmin": bool(is_admin),
        "iat": issued_at,
    }
    if expires_delta is not None:
        payload["exp"] = issued_at + expires_delta

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decode and validate a token.

    Args:
        token: The JWT token to decode

    Returns:
        Dictionary containing the token payload

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
