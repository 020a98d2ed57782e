"""Verification of access tokens issued by the hosted identity provider."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from bonapp.config import get_settings

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    settings = get_settings()
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
        return payload
    except JWTError as e:
        logger.debug(f"Rejected access token: {e}")
        return None


def get_owner_id(token: str) -> str | None:
    """Owner id (the ``sub`` claim) of a valid token, None otherwise."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    sub = payload.get("sub")
    return str(sub) if sub else None


def create_access_token(owner_id: str, expires_minutes: int = 60) -> str:
    """Create a token the way the identity provider does (used by scripts and tests)."""
    settings = get_settings()
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": owner_id, "exp": expire}
    if settings.jwt_audience is not None:
        to_encode["aud"] = settings.jwt_audience
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
