from __future__ import annotations

from datetime import datetime

from ninja import Schema

from api.schemas import CamelSchema


class MediaItemOut(CamelSchema):
    id: int
    filename: str
    original_url: str
    thumbnail_url: str
    alt: str = ""
    size: int = 0
    width: int | None = None
    height: int | None = None
    mime_type: str = ""
    tags: list[str] = []
    category: str = ""
    project_id: int | None = None
    order: int | None = None
    created_at: datetime


class MediaItemUpdateIn(CamelSchema):
    alt: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    project_id: int | None = None
    order: int | None = None


class ReorderIn(CamelSchema):
    project_id: int | None = None
    ids: list[int]


class ReorderOut(Schema):
    updated: int
