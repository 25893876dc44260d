from __future__ import annotations

from django.db.models import Prefetch
from ninja import Router
from ninja.errors import HttpError

from accounts.auth import require_admin
from api.i18n import get_request_language_code, pick_best_translation
from languages.registry import LanguageRegistryError

from .models import ContentPage, ContentPageTranslation
from .richtext import coerce_document, render_html
from .schemas import (
    ContentPageAdminOut,
    ContentPageIn,
    ContentPageOut,
    GenerateSlugIn,
    GenerateSlugOut,
    ValidateSlugIn,
    ValidateSlugOut,
)
from .services import SlugError, save_page, toggle_published
from .slugs import generate_slug, is_slug_available, is_valid_slug, validate_slug

router = Router(tags=["content"])
admin_router = Router(tags=["admin-content"])


def _translations_prefetch():
    return Prefetch(
        "translations",
        queryset=ContentPageTranslation.objects.select_related("language").order_by("language__code"),
    )


def _admin_out(page: ContentPage) -> dict:
    return {
        "id": page.id,
        "slug": page.slug,
        "published": page.published,
        "translations": [
            {"language_code": t.language.code, "title": t.title, "content": coerce_document(t.content)}
            for t in page.translations.all()
        ],
        "created_at": page.created_at,
        "updated_at": page.updated_at,
    }


def _get_page(page_id: int) -> ContentPage:
    page = ContentPage.objects.prefetch_related(_translations_prefetch()).filter(id=int(page_id)).first()
    if page is None:
        raise HttpError(404, "Page not found")
    return page


# --- public ---


@router.get("/pages/{slug}", response=ContentPageOut)
def page_detail(request, slug: str, language_code: str | None = None):
    if language_code is None:
        language_code = get_request_language_code(request)

    page = ContentPage.objects.prefetch_related(_translations_prefetch()).filter(slug=slug, published=True).first()
    if page is None:
        raise HttpError(404, "Page not found")

    best = pick_best_translation(page.translations.all(), language_code)
    content = coerce_document(getattr(best, "content", None))
    return {
        "slug": page.slug,
        "language_code": best.language.code if best is not None else "",
        "title": getattr(best, "title", "") or "",
        "content": content,
        "html": render_html(content),
        "updated_at": page.updated_at,
    }


@router.post("/validate-slug", response=ValidateSlugOut, by_alias=True, exclude_none=True)
def validate_slug_endpoint(request, payload: ValidateSlugIn):
    result = validate_slug(payload.slug, payload.exclude_id)
    out = {"is_valid": result.is_valid, "is_available": result.is_available}
    if result.error:
        out["error"] = result.error
    if result.suggestions:
        out["suggestions"] = result.suggestions
    return out


@router.post("/generate-slug", response=GenerateSlugOut, by_alias=True)
def generate_slug_endpoint(request, payload: GenerateSlugIn):
    slug = generate_slug(payload.title)
    valid = is_valid_slug(slug)
    return {"slug": slug, "is_valid": valid, "is_available": valid and is_slug_available(slug)}


# --- admin ---


@admin_router.get("/pages", response=list[ContentPageAdminOut], by_alias=True)
def admin_pages(request, published: bool | None = None):
    require_admin(request)
    qs = ContentPage.objects.prefetch_related(_translations_prefetch()).order_by("slug")
    if published is not None:
        qs = qs.filter(published=published)
    return [_admin_out(p) for p in qs]


@admin_router.get("/pages/{page_id}", response=ContentPageAdminOut, by_alias=True)
def admin_page_detail(request, page_id: int):
    require_admin(request)
    return _admin_out(_get_page(page_id))


def _save(page: ContentPage | None, payload: ContentPageIn) -> ContentPage:
    try:
        page = save_page(
            page=page,
            slug=payload.slug,
            published=payload.published,
            translations=[t.model_dump() for t in payload.translations],
        )
    except SlugError as exc:
        raise HttpError(exc.status, exc.message)
    except LanguageRegistryError as exc:
        raise HttpError(400, str(exc))
    return _get_page(page.id)


@admin_router.post("/pages", response={201: ContentPageAdminOut}, by_alias=True)
def admin_page_create(request, payload: ContentPageIn):
    require_admin(request)
    return 201, _admin_out(_save(None, payload))


@admin_router.put("/pages/{page_id}", response=ContentPageAdminOut, by_alias=True)
def admin_page_update(request, page_id: int, payload: ContentPageIn):
    require_admin(request)
    return _admin_out(_save(_get_page(page_id), payload))


@admin_router.post("/pages/{page_id}/toggle-publish", response=ContentPageAdminOut, by_alias=True)
def admin_page_toggle_publish(request, page_id: int):
    require_admin(request)
    page = toggle_published(_get_page(page_id))
    return _admin_out(page)


@admin_router.delete("/pages/{page_id}", response={204: None})
def admin_page_delete(request, page_id: int):
    require_admin(request)
    deleted, _ = ContentPage.objects.filter(id=int(page_id)).delete()
    if not deleted:
        raise HttpError(404, "Page not found")
    return 204, None
