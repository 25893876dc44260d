from __future__ import annotations

from ninja import Schema


class LoginIn(Schema):
    email: str
    password: str


class RefreshIn(Schema):
    refresh: str | None = None


class StatusOut(Schema):
    status: str


class MeOut(Schema):
    id: int
    email: str
    display_name: str = ""
    is_staff: bool
