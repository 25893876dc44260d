from __future__ import annotations

from django.conf import settings
from ninja import Router
from ninja.errors import HttpError

from accounts.auth import require_admin
from api.i18n import get_request_language_code
from languages.registry import get_registry

from .components import dump_component
from .document import ComponentNotFound, InvalidComponent
from .schemas import (
    AddComponentIn,
    ComponentOut,
    LayoutIn,
    LayoutOut,
    MoveComponentIn,
    RenderedLayoutOut,
    UpdateComponentIn,
)
from .services import edit_document, load_document, normalize_code, render_document, save_document

router = Router(tags=["page-builder"])


def _layout_out(code: str) -> dict:
    layout, doc = load_document(code)
    return {
        "code": normalize_code(code),
        "components": doc.to_data(),
        "updated_at": layout.updated_at if layout is not None else None,
    }


def _edit(code: str, fn):
    try:
        with edit_document(code) as doc:
            result = fn(doc)
    except ComponentNotFound as exc:
        raise HttpError(404, str(exc))
    except InvalidComponent as exc:
        raise HttpError(400, str(exc))
    return result


@router.get("/{code}", response=LayoutOut, by_alias=True)
def layout_detail(request, code: str):
    try:
        return _layout_out(code)
    except InvalidComponent:
        raise HttpError(500, "Stored layout is invalid")


@router.post("/{code}", response=LayoutOut, by_alias=True)
def layout_save(request, code: str, payload: LayoutIn):
    require_admin(request)
    try:
        save_document(code, payload.components)
    except InvalidComponent as exc:
        raise HttpError(400, str(exc))
    return _layout_out(code)


@router.get("/{code}/render", response=RenderedLayoutOut, by_alias=True)
def layout_render(request, code: str, language_code: str | None = None):
    if language_code is None:
        language_code = get_request_language_code(request)
    _, doc = load_document(code)
    resolved, components = render_document(doc, language_code)
    return {"code": normalize_code(code), "language_code": resolved, "components": components}


@router.post("/{code}/components", response={201: ComponentOut})
def component_add(request, code: str, payload: AddComponentIn):
    require_admin(request)
    codes = get_registry().active_codes or [getattr(settings, "LANGUAGE_CODE", "nl")]
    component = _edit(code, lambda doc: doc.add_component(payload.type, codes, payload.data))
    return 201, dump_component(component)


@router.patch("/{code}/components/{component_id}", response=ComponentOut)
def component_update(request, code: str, component_id: str, payload: UpdateComponentIn):
    require_admin(request)
    component = _edit(code, lambda doc: doc.update_component(component_id, payload.data))
    return dump_component(component)


@router.delete("/{code}/components/{component_id}", response={204: None})
def component_delete(request, code: str, component_id: str):
    require_admin(request)
    _edit(code, lambda doc: doc.delete_component(component_id))
    return 204, None


@router.post("/{code}/components/{component_id}/duplicate", response={201: ComponentOut})
def component_duplicate(request, code: str, component_id: str):
    require_admin(request)
    component = _edit(code, lambda doc: doc.duplicate_component(component_id))
    return 201, dump_component(component)


@router.post("/{code}/move", response=LayoutOut, by_alias=True)
def component_move(request, code: str, payload: MoveComponentIn):
    require_admin(request)
    _edit(code, lambda doc: doc.move_component(payload.from_index, payload.to_index))
    return _layout_out(code)
