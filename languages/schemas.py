from __future__ import annotations

from datetime import datetime

from ninja import Schema

from api.schemas import CamelSchema


class LanguageOut(Schema):
    id: int
    code: str
    name: str
    is_default: bool
    is_active: bool


class LanguageAdminOut(LanguageOut):
    coverage: float = 0.0
    created_at: datetime
    updated_at: datetime


class LanguageIn(CamelSchema):
    code: str
    name: str
    is_default: bool = False
    is_active: bool = True
    auto_translate: bool = True


class LanguageUpdateIn(CamelSchema):
    name: str | None = None
    is_active: bool | None = None
    is_default: bool | None = None


class CoverageOut(Schema):
    code: str
    name: str
    coverage: float


class TranslationKeyIn(Schema):
    key: str
    description: str = ""
    values: dict[str, str] = {}


class TranslationValuesIn(Schema):
    values: dict[str, str]


class TranslationKeyOut(Schema):
    id: int
    key: str
    description: str = ""
    values: dict[str, str] = {}
