from __future__ import annotations

import re
from dataclasses import dataclass, field

from django.utils.text import slugify

from .models import ContentPage

SLUG_MIN_LENGTH = 2
SLUG_MAX_LENGTH = 200
MAX_SUGGESTIONS = 3

_SLUG_CHARS_RE = re.compile(r"^[a-z0-9-]+$")


@dataclass(frozen=True)
class SlugValidation:
    is_valid: bool
    is_available: bool
    error: str | None = None
    suggestions: list[str] = field(default_factory=list)


def slug_format_error(slug: str) -> str | None:
    if len(slug) < SLUG_MIN_LENGTH:
        return f"Slug must be at least {SLUG_MIN_LENGTH} characters long"
    if len(slug) > SLUG_MAX_LENGTH:
        return f"Slug must be at most {SLUG_MAX_LENGTH} characters long"
    if not _SLUG_CHARS_RE.match(slug):
        return "Slug can only contain lowercase letters, numbers and hyphens"
    if slug.startswith("-") or slug.endswith("-"):
        return "Slug cannot start or end with a hyphen"
    return None


def is_valid_slug(slug: str | None) -> bool:
    return slug_format_error((slug or "").strip()) is None


def _exclude_pk(exclude_id: str | int | None) -> int | None:
    if isinstance(exclude_id, int):
        return exclude_id
    raw = str(exclude_id or "").strip()
    return int(raw) if raw.isdigit() else None


def _other_pages(exclude_id: str | int | None):
    """Pages other than the one being edited; `exclude_id` is its primary key."""
    qs = ContentPage.objects.all()
    pk = _exclude_pk(exclude_id)
    return qs if pk is None else qs.exclude(id=pk)


def is_slug_available(slug: str, exclude_id: str | int | None = None) -> bool:
    return not _other_pages(exclude_id).filter(slug=slug).exists()


def suggest_slugs(slug: str, exclude_id: str | int | None = None, *, limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Free `slug-2`, `slug-3`, ... candidates, at most `limit` of them."""
    taken = set(_other_pages(exclude_id).filter(slug__startswith=f"{slug}-").values_list("slug", flat=True))
    out: list[str] = []
    n = 2
    while len(out) < limit and n < 2 + 100:
        candidate = f"{slug}-{n}"
        if len(candidate) <= SLUG_MAX_LENGTH and candidate not in taken:
            out.append(candidate)
        n += 1
    return out


def validate_slug(candidate: str | None, exclude_id: str | int | None = None) -> SlugValidation:
    """Format + availability check; read-only, safe to call on every keystroke."""
    slug = (candidate or "").strip()
    error = slug_format_error(slug)
    if error:
        return SlugValidation(is_valid=False, is_available=False, error=error)

    if is_slug_available(slug, exclude_id):
        return SlugValidation(is_valid=True, is_available=True)

    return SlugValidation(
        is_valid=True,
        is_available=False,
        error="Slug is already in use",
        suggestions=suggest_slugs(slug, exclude_id),
    )


def generate_slug(title: str | None) -> str:
    return slugify(title or "")[:SLUG_MAX_LENGTH].strip("-")
