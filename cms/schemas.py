from __future__ import annotations

from datetime import datetime
from typing import Any

from ninja import Schema

from api.schemas import CamelSchema


class ContentPageOut(Schema):
    slug: str
    language_code: str = ""
    title: str = ""
    content: dict
    html: str = ""
    updated_at: datetime


class PageTranslationIn(CamelSchema):
    language_code: str
    title: str = ""
    content: Any = None


class PageTranslationOut(CamelSchema):
    language_code: str
    title: str
    content: dict


class ContentPageIn(CamelSchema):
    slug: str
    published: bool = False
    translations: list[PageTranslationIn] = []


class ContentPageAdminOut(CamelSchema):
    id: int
    slug: str
    published: bool
    translations: list[PageTranslationOut] = []
    created_at: datetime
    updated_at: datetime


class ValidateSlugIn(CamelSchema):
    slug: str = ""
    exclude_id: str | int | None = None


class ValidateSlugOut(CamelSchema):
    is_valid: bool
    is_available: bool
    error: str | None = None
    suggestions: list[str] | None = None


class GenerateSlugIn(Schema):
    title: str = ""


class GenerateSlugOut(CamelSchema):
    slug: str
    is_valid: bool
    is_available: bool
