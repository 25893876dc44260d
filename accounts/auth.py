from __future__ import annotations

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from ninja.security import HttpBearer

from .jwt_utils import decode_token

User = get_user_model()


class AuthError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = int(status)
        self.message = message


def _token_from_request(request) -> str:
    header = (request.headers.get("Authorization") or "").strip()
    if header.lower().startswith("bearer "):
        return header[7:].strip()

    cookie_name = getattr(settings, "AUTH_COOKIE_ACCESS_NAME", "access_token")
    return (request.COOKIES.get(cookie_name) or "").strip()


def user_from_token(token: str):
    if not token:
        return None
    try:
        payload = decode_token(token)
    except jwt.PyJWTError:
        return None

    if payload.get("type") != "access":
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return User.objects.filter(id=int(user_id), is_active=True).first()


def require_admin(request):
    """Return the authenticated staff user or raise `AuthError`.

    Missing/invalid session is 401, a valid non-staff session is 403.
    Called first in every admin handler, before any mutation.
    """
    user = user_from_token(_token_from_request(request))
    if user is None:
        raise AuthError(401, "Unauthorized")
    if not user.is_staff:
        raise AuthError(403, "Forbidden")
    request.auth = user
    return user


class JWTAuth(HttpBearer):
    def __call__(self, request):
        # Cookie first (browser admin), then Authorization header.
        return self.authenticate(request, _token_from_request(request))

    def authenticate(self, request, token: str):
        return user_from_token(token)
