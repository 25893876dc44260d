from __future__ import annotations

from datetime import datetime

from ninja import Schema

from api.schemas import CamelSchema


class ContactIn(CamelSchema):
    name: str = ""
    email: str = ""
    project_type: str = ""
    message: str = ""
    privacy_accepted: bool = False
    marketing_consent: bool = False


class ContactCreatedOut(Schema):
    success: bool = True
    id: int


class ContactErrorOut(Schema):
    detail: str
    errors: dict[str, str] = {}


class ContactMessageOut(CamelSchema):
    id: int
    name: str
    email: str
    project_type: str
    message: str
    privacy_accepted: bool
    marketing_consent: bool
    read: bool
    replied: bool
    created_at: datetime


class ContactMessageUpdateIn(Schema):
    read: bool | None = None
    replied: bool | None = None


class UnreadCountOut(Schema):
    unread: int
