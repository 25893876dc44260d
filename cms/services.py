from __future__ import annotations

from django.db import IntegrityError, transaction

from languages.registry import LanguageRegistryError, get_registry

from .models import ContentPage, ContentPageTranslation
from .richtext import coerce_document
from .slugs import is_slug_available, slug_format_error


class SlugError(ValueError):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = int(status)
        self.message = message


def _check_slug(slug: str, exclude_id: int | None) -> str:
    slug = (slug or "").strip()
    error = slug_format_error(slug)
    if error:
        raise SlugError(400, error)
    if not is_slug_available(slug, exclude_id):
        raise SlugError(409, "Slug is already in use")
    return slug


def _replace_translations(page: ContentPage, translations: list[dict]) -> None:
    registry = get_registry()
    rows = []
    seen: set[int] = set()
    for t in translations or []:
        lang = registry.by_code(t.get("language_code") or "")
        if lang is None:
            raise LanguageRegistryError(f"Unknown language: {t.get('language_code')}")
        if lang.id in seen:
            continue
        seen.add(lang.id)
        rows.append(
            ContentPageTranslation(
                page=page,
                language_id=lang.id,
                title=(t.get("title") or "").strip(),
                content=coerce_document(t.get("content")),
            )
        )
    page.translations.all().delete()
    ContentPageTranslation.objects.bulk_create(rows)


def save_page(
    *,
    page: ContentPage | None,
    slug: str,
    published: bool,
    translations: list[dict],
) -> ContentPage:
    """Create or update a page; translations are replaced as a unit.

    Raises `SlugError` (400 format, 409 taken) and `LanguageRegistryError`.
    """
    slug = _check_slug(slug, page.id if page is not None else None)

    try:
        with transaction.atomic():
            if page is None:
                page = ContentPage.objects.create(slug=slug, published=bool(published))
            else:
                page.slug = slug
                page.published = bool(published)
                page.save(update_fields=["slug", "published", "updated_at"])
            _replace_translations(page, translations)
    except IntegrityError:
        # Lost a race with a concurrent save of the same slug.
        raise SlugError(409, "Slug is already in use")
    return page


def toggle_published(page: ContentPage) -> ContentPage:
    page.published = not page.published
    page.save(update_fields=["published", "updated_at"])
    return page
