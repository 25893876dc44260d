from __future__ import annotations

from ninja import Schema
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(Schema):
    """Schema whose JSON keys are camelCase (front-end wire format)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
