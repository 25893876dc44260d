from __future__ import annotations

from datetime import datetime
from typing import Any

from ninja import Schema

from api.schemas import CamelSchema


class ContentTypeOut(Schema):
    id: int
    name: str
    display_name: str


class ContentTypeIn(Schema):
    name: str
    display_name: str = ""


class ProjectImageOut(CamelSchema):
    original_url: str
    thumbnail_url: str = ""
    alt: str = ""
    order: int = 0


class ProjectImageIn(CamelSchema):
    original_url: str
    thumbnail_url: str = ""
    alt: str = ""
    order: int | None = None


class ProjectOut(Schema):
    id: int
    content_type: ContentTypeOut
    featured: bool
    language_code: str = ""
    title: str = ""
    description: dict
    description_html: str = ""
    materials: list[str] = []
    images: list[ProjectImageOut] = []
    created_at: datetime


class ProjectTranslationIn(CamelSchema):
    language_code: str
    title: str = ""
    description: Any = None
    materials: list[str] | str = []


class ProjectTranslationOut(CamelSchema):
    language_code: str
    title: str
    description: dict
    materials: list[str]


class ProjectIn(CamelSchema):
    content_type_id: int
    featured: bool = False
    published: bool = False
    translations: list[ProjectTranslationIn]
    images: list[ProjectImageIn] = []


class ProjectUpdateIn(CamelSchema):
    content_type_id: int | None = None
    featured: bool | None = None
    published: bool | None = None
    translations: list[ProjectTranslationIn] | None = None
    images: list[ProjectImageIn] | None = None


class ProjectAdminOut(CamelSchema):
    id: int
    content_type_id: int
    featured: bool
    published: bool
    created_by: str | None = None
    translations: list[ProjectTranslationOut] = []
    images: list[ProjectImageOut] = []
    created_at: datetime
    updated_at: datetime


class TranslateAllIn(CamelSchema):
    project_ids: Any = None


class TranslateAllResults(Schema):
    total: int
    success: int
    failed: int
    errors: list[str]


class TranslateAllOut(Schema):
    success: bool = True
    results: TranslateAllResults
