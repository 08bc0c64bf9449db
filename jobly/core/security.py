"""
JWT helpers.

The API never issues tokens from an endpoint; it only decodes the bearer
token to learn who is calling and whether they are an admin. Tokens carry
``{"username": str, "isAdmin": bool}`` and are signed with HS256.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from jobly.core.config import settings

def create_access_token(username: str, is_admin: bool = False, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed access token for a user.

    Args:
        username: Caller's username, stored in the ``username`` claim
        is_admin: Stored in the ``isAdmin`` claim
        expires_delta: Optional expiration time delta (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token as a string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "username": username,
        "isAdmin": is_admin,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_token(token: str) -> dict:
    """
    Decode and validate a JWT token.

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
