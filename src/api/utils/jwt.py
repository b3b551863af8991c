from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(user_id: UUID, role: str = "user", expires_delta: Optional[timedelta] = None) -> str:
    """
    Generate a session token

    Args:
        user_id: User UUID
        role: Coarse app role hint; never used for permission decisions
        expires_delta: Token lifetime (SESSION_TTL_MINUTES when omitted)

    Returns:
        JWT token string
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.SESSION_TTL_MINUTES)
    payload = {
        "user_id": str(user_id),
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode a session token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid, expired or missing user_id
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
    except JWTError:
        return None
    if "user_id" not in payload:
        return None
    return payload
