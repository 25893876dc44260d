from __future__ import annotations

import jwt
from django.conf import settings
from django.contrib.auth import authenticate
from django.http import JsonResponse
from ninja import Router
from ninja.errors import HttpError

from .auth import JWTAuth
from .jwt_utils import decode_token, issue_access_token, issue_refresh_token
from .schemas import LoginIn, MeOut, RefreshIn, StatusOut

router = Router(tags=["auth"])
auth = JWTAuth()


def _cookie_samesite() -> str:
    v = (getattr(settings, "AUTH_COOKIE_SAMESITE", "lax") or "lax").lower()
    if v == "strict":
        return "Strict"
    if v == "none":
        return "None"
    return "Lax"


def _cookie_secure(request) -> bool:
    explicit = getattr(settings, "AUTH_COOKIE_SECURE", None)
    if explicit is True or explicit is False:
        return bool(explicit)
    return bool(request.is_secure())


def _set_auth_cookies(request, response: JsonResponse, *, access: str, refresh: str | None):
    access_name = getattr(settings, "AUTH_COOKIE_ACCESS_NAME", "access_token")
    refresh_name = getattr(settings, "AUTH_COOKIE_REFRESH_NAME", "refresh_token")
    domain = getattr(settings, "AUTH_COOKIE_DOMAIN", None) or None

    response.set_cookie(
        access_name,
        access,
        httponly=True,
        secure=_cookie_secure(request),
        samesite=_cookie_samesite(),
        domain=domain,
        path="/",
    )
    if refresh is not None:
        response.set_cookie(
            refresh_name,
            refresh,
            httponly=True,
            secure=_cookie_secure(request),
            samesite=_cookie_samesite(),
            domain=domain,
            path="/",
        )


def _clear_auth_cookies(response: JsonResponse):
    domain = getattr(settings, "AUTH_COOKIE_DOMAIN", None) or None
    response.delete_cookie(getattr(settings, "AUTH_COOKIE_ACCESS_NAME", "access_token"), path="/", domain=domain)
    response.delete_cookie(getattr(settings, "AUTH_COOKIE_REFRESH_NAME", "refresh_token"), path="/", domain=domain)


@router.post("/login", response=StatusOut)
def login(request, payload: LoginIn):
    user = authenticate(request, username=payload.email.strip().lower(), password=payload.password)
    if user is None:
        raise HttpError(401, "Invalid credentials")

    resp = JsonResponse({"status": "ok"})
    _set_auth_cookies(
        request,
        resp,
        access=issue_access_token(user_id=user.id),
        refresh=issue_refresh_token(user_id=user.id),
    )
    return resp


@router.post("/refresh", response=StatusOut)
def refresh(request, payload: RefreshIn | None = None):
    refresh_token = ((payload.refresh if payload else None) or "").strip()
    if not refresh_token:
        refresh_name = getattr(settings, "AUTH_COOKIE_REFRESH_NAME", "refresh_token")
        refresh_token = (request.COOKIES.get(refresh_name) or "").strip()

    if not refresh_token:
        raise HttpError(401, "Invalid refresh token")

    try:
        data = decode_token(refresh_token)
    except jwt.PyJWTError:
        raise HttpError(401, "Invalid refresh token")

    if data.get("type") != "refresh" or not data.get("sub"):
        raise HttpError(401, "Invalid refresh token")

    resp = JsonResponse({"status": "ok"})
    _set_auth_cookies(request, resp, access=issue_access_token(user_id=int(data["sub"])), refresh=None)
    return resp


@router.post("/logout", response=StatusOut)
def logout(request):
    resp = JsonResponse({"status": "ok"})
    _clear_auth_cookies(resp)
    return resp


@router.get("/me", response=MeOut, auth=auth)
def me(request):
    user = request.auth
    return {
        "id": user.id,
        "email": user.email,
        "display_name": user.label,
        "is_staff": bool(user.is_staff),
    }
