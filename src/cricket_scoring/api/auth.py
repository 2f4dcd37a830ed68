"""Bearer tokens: the only place the signing secret is read.

Tokens carry ``{"userId": ..., "role": ...}``. A missing, expired or
tampered token never fails the request here; the caller simply becomes an
anonymous viewer and mutating operations reject it downstream.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..config import settings
from ..scoring.access import AuthContext, Role

logger = logging.getLogger(__name__)


def issue_token(subject: str, role: Role, ttl_hours: Optional[int] = None, secret: Optional[str] = None) -> str:
    """Sign a token for a user id and role."""
    ttl = ttl_hours if ttl_hours is not None else settings.auth.token_ttl_hours
    now = datetime.now(timezone.utc)
    payload = {
        "userId": subject,
        "role": Role(role).value,
        "iat": now,
        "exp": now + timedelta(hours=ttl),
    }
    return jwt.encode(payload, secret or settings.auth.jwt_secret, algorithm=settings.auth.jwt_algorithm)


def decode_token(token: Optional[str], secret: Optional[str] = None) -> AuthContext:
    """Verified caller identity, or an anonymous viewer."""
    if not token:
        return AuthContext.anonymous()
    try:
        payload = jwt.decode(
            token,
            secret or settings.auth.jwt_secret,
            algorithms=[settings.auth.jwt_algorithm],
        )
    except jwt.PyJWTError as e:
        logger.info("Rejected bearer token: %s", e)
        return AuthContext.anonymous()

    subject = payload.get("userId")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        logger.info("Bearer token for %s carries unknown role %r", subject, payload.get("role"))
        return AuthContext.anonymous()
    if not subject:
        return AuthContext.anonymous()
    return AuthContext(subject=str(subject), role=role)
