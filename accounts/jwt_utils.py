from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _issue(*, user_id: int, kind: str, ttl: timedelta) -> str:
    now = _now()
    payload = {
        "sub": str(user_id),
        "type": kind,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def issue_access_token(*, user_id: int) -> str:
    return _issue(
        user_id=user_id,
        kind="access",
        ttl=timedelta(minutes=int(settings.JWT_ACCESS_TTL_MINUTES)),
    )


def issue_refresh_token(*, user_id: int) -> str:
    return _issue(
        user_id=user_id,
        kind="refresh",
        ttl=timedelta(days=int(settings.JWT_REFRESH_TTL_DAYS)),
    )


def decode_token(token: str) -> dict:
    """Decode and verify a token; raises `jwt.PyJWTError` on bad/expired tokens."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
