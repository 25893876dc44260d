from __future__ import annotations

from contextlib import contextmanager

from django.conf import settings
from django.db import transaction

from cms.richtext import sanitize_html
from languages.registry import get_registry

from .document import PageDocument
from .models import PageLayout


def normalize_code(code: str | None) -> str:
    return (code or "").strip().lower() or getattr(settings, "PAGE_BUILDER_DEFAULT_CODE", "homepage")


def load_document(code: str) -> tuple[PageLayout | None, PageDocument]:
    layout = PageLayout.objects.filter(code=normalize_code(code)).first()
    return layout, PageDocument.from_data(layout.components if layout is not None else [])


def save_document(code: str, raw_components) -> PageLayout:
    """Replace the whole layout. List position wins over submitted `order` values."""
    doc = PageDocument.from_data(raw_components, renumber=True)
    layout, _ = PageLayout.objects.update_or_create(
        code=normalize_code(code),
        defaults={"components": doc.to_data()},
    )
    return layout


@contextmanager
def edit_document(code: str):
    """Lock the layout row, yield its document, persist it on clean exit."""
    with transaction.atomic():
        layout, _ = PageLayout.objects.select_for_update().get_or_create(code=normalize_code(code))
        doc = PageDocument.from_data(layout.components)
        yield doc
        layout.components = doc.to_data()
        layout.save(update_fields=["components", "updated_at"])


def render_document(doc: PageDocument, language_code: str | None) -> tuple[str, list[dict]]:
    """Resolve for `language_code`, or the default language when it is unknown or inactive."""
    registry = get_registry()
    default_code = registry.default_code
    code = language_code if registry.active_by_code(language_code) is not None else default_code

    out = doc.render(code or "", default_code)
    for component in out:
        if component["type"] == "text" and isinstance(component["data"].get("content"), str):
            component["data"]["content"] = sanitize_html(component["data"]["content"])
    return code or "", out
