from __future__ import annotations

import uuid
from typing import Any

from pydantic import ValidationError

from .components import (
    COMPONENT_TYPES,
    DATA_MODELS,
    component_adapter,
    component_list_adapter,
    default_component_data,
    dump_component,
    dump_data,
    localize,
)


class ComponentNotFound(LookupError):
    def __init__(self, component_id: str):
        super().__init__(f"Component {component_id} not found")
        self.component_id = component_id


class InvalidComponent(ValueError):
    pass


def new_component_id(component_type: str) -> str:
    return f"{component_type}-{uuid.uuid4().hex[:12]}"


def _validation_message(exc: ValidationError) -> str:
    err = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in err.get("loc", ()))
    msg = err.get("msg") or "Invalid component"
    return f"{loc}: {msg}" if loc else msg


class PageDocument:
    """Ordered list of page components.

    `id` is the only identity; list position is the truth for ordering and
    `order` is re-derived from it after add, move and duplicate. Delete leaves
    the remaining `order` values as they were.
    """

    def __init__(self, components: list | None = None) -> None:
        self.components = list(components or [])

    @classmethod
    def from_data(cls, raw: Any, *, renumber: bool = False) -> PageDocument:
        """Build from stored or submitted JSON; invalid payloads raise `InvalidComponent`."""
        if raw in (None, ""):
            raw = []
        try:
            components = component_list_adapter.validate_python(raw)
        except ValidationError as exc:
            raise InvalidComponent(_validation_message(exc))

        ids = [c.id for c in components]
        if len(ids) != len(set(ids)):
            raise InvalidComponent("Component ids must be unique")

        doc = cls(components)
        if renumber:
            doc.renumber()
        return doc

    def to_data(self) -> list[dict]:
        return [dump_component(c) for c in self.components]

    def renumber(self) -> None:
        for i, c in enumerate(self.components):
            c.order = i

    def index_of(self, component_id: str) -> int:
        for i, c in enumerate(self.components):
            if c.id == component_id:
                return i
        raise ComponentNotFound(component_id)

    def get(self, component_id: str):
        return self.components[self.index_of(component_id)]

    def add_component(self, component_type: str, language_codes: list[str], data: dict | None = None):
        if component_type not in COMPONENT_TYPES:
            raise InvalidComponent(f"Unknown component type: {component_type}")
        payload = default_component_data(component_type, language_codes)
        if data:
            payload.update(dump_data(self._validate_data(component_type, data)))
        component = self._build(
            {
                "id": new_component_id(component_type),
                "type": component_type,
                "order": len(self.components),
                "data": payload,
            }
        )
        self.components.append(component)
        self.renumber()
        return component

    def move_component(self, from_index: int, to_index: int) -> None:
        n = len(self.components)
        if not (0 <= from_index < n) or not (0 <= to_index < n):
            raise InvalidComponent("Index out of range")
        component = self.components.pop(from_index)
        self.components.insert(to_index, component)
        self.renumber()

    def update_component(self, component_id: str, data: dict):
        """Merge `data` into the component's payload; id, type and order are kept."""
        i = self.index_of(component_id)
        current = self.components[i]
        partial = dump_data(self._validate_data(current.type, data or {}))
        merged = {**dump_data(current.data), **partial}
        updated = self._build({"id": current.id, "type": current.type, "order": current.order, "data": merged})
        self.components[i] = updated
        return updated

    def delete_component(self, component_id: str) -> None:
        del self.components[self.index_of(component_id)]

    def duplicate_component(self, component_id: str):
        source = self.get(component_id)
        clone = source.model_copy(deep=True)
        clone.id = new_component_id(source.type)
        self.components.append(clone)
        self.renumber()
        return clone

    def render(self, language_code: str, default_language_code: str) -> list[dict]:
        """Components sorted by `order` (gaps allowed), multilingual fields resolved."""
        ordered = sorted(enumerate(self.components), key=lambda pair: (pair[1].order, pair[0]))
        return [
            {
                "id": c.id,
                "type": c.type,
                "order": c.order,
                "data": localize(c.data, language_code, default_language_code),
            }
            for _, c in ordered
        ]

    @staticmethod
    def _validate_data(component_type: str, data: dict):
        try:
            return DATA_MODELS[component_type].model_validate(data)
        except ValidationError as exc:
            raise InvalidComponent(_validation_message(exc))

    @staticmethod
    def _build(raw: dict):
        try:
            return component_adapter.validate_python(raw)
        except ValidationError as exc:
            raise InvalidComponent(_validation_message(exc))
