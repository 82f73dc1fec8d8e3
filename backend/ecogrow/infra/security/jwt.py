"""Access tokens in the hosted auth service's shape (HS256, aud=authenticated, sub=user id)."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ecogrow.domain.identity.models import Identity
from ecogrow.settings import settings

logger = logging.getLogger(__name__)


def create_access_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token carrying the user id and session id."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {
        "sub": identity.user_id,
        "sid": identity.session_id,
        "aud": settings.jwt_audience,
        "role": "authenticated",
        "iat": now,
        "exp": expire,
    }
    if identity.email:
        payload["email"] = identity.email
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Verify signature, audience and expiry. Returns None for any invalid token."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_exp": True},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.info("Invalid token: %s", e)
        return None
