from __future__ import annotations

from datetime import datetime
from typing import Any

from ninja import Schema

from api.schemas import CamelSchema


class ComponentOut(Schema):
    id: str
    type: str
    order: int
    data: dict


class LayoutOut(CamelSchema):
    code: str
    components: list[ComponentOut] = []
    updated_at: datetime | None = None


class RenderedLayoutOut(CamelSchema):
    code: str
    language_code: str
    components: list[ComponentOut] = []


class LayoutIn(Schema):
    components: list[Any] = []


class AddComponentIn(Schema):
    type: str
    data: dict | None = None


class UpdateComponentIn(Schema):
    data: dict


class MoveComponentIn(CamelSchema):
    from_index: int
    to_index: int
