from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_access_token(
    user_id: UUID, expires_delta: timedelta = timedelta(hours=1)
) -> str:
    """
    Create JWT access token

    Args:
        user_id: User UUID, stored in the "sub" claim
        expires_delta: Token expiration duration

    Returns:
        JWT token string signed with JWT_SECRET
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "aud": ApplicationConfig.JWT_AUDIENCE,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
            audience=ApplicationConfig.JWT_AUDIENCE,
        )
        return payload
    except JWTError:
        return None
