from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from django.core.cache import cache
from django.db import transaction
from django.db.models import Q

from .models import Language

_CACHE_KEY = "languages:registry:v1"


class LanguageRegistryError(ValueError):
    pass


@dataclass(frozen=True)
class LanguageInfo:
    id: int
    code: str
    name: str
    is_default: bool
    is_active: bool


@dataclass(frozen=True)
class LanguageRegistry:
    languages: tuple[LanguageInfo, ...]

    @property
    def active(self) -> list[LanguageInfo]:
        return [lang for lang in self.languages if lang.is_active]

    @property
    def default(self) -> LanguageInfo | None:
        for lang in self.languages:
            if lang.is_default:
                return lang
        return None

    @property
    def default_code(self) -> str:
        d = self.default
        return d.code if d is not None else ""

    @property
    def active_codes(self) -> list[str]:
        return [lang.code for lang in self.active]

    @property
    def target_languages(self) -> list[LanguageInfo]:
        """Active languages other than the default (translation targets)."""
        return [lang for lang in self.active if not lang.is_default]

    def by_code(self, code: str | None) -> LanguageInfo | None:
        c = (code or "").strip().lower()
        for lang in self.languages:
            if lang.code == c:
                return lang
        return None

    def active_by_code(self, code: str | None) -> LanguageInfo | None:
        lang = self.by_code(code)
        return lang if lang is not None and lang.is_active else None


def _load() -> LanguageRegistry:
    rows = Language.objects.order_by("-is_default", "-is_active", "code").values(
        "id", "code", "name", "is_default", "is_active"
    )
    return LanguageRegistry(
        languages=tuple(
            LanguageInfo(
                id=int(r["id"]),
                code=r["code"],
                name=r["name"],
                is_default=bool(r["is_default"]),
                is_active=bool(r["is_active"]),
            )
            for r in rows
        )
    )


def get_registry() -> LanguageRegistry:
    cached = cache.get(_CACHE_KEY)
    if isinstance(cached, LanguageRegistry):
        return cached
    registry = _load()
    cache.set(_CACHE_KEY, registry, timeout=int(getattr(settings, "LANGUAGE_REGISTRY_CACHE_SECONDS", 300)))
    return registry


def invalidate_registry() -> None:
    cache.delete(_CACHE_KEY)


def get_default_language_code() -> str:
    """Default language code from the registry, read at call time."""
    code = get_registry().default_code
    if code:
        return code
    return (getattr(settings, "LANGUAGE_CODE", "") or "").split("-")[0].strip().lower()


def set_default_language(language_id: int) -> Language:
    """Make `language_id` the only default language.

    The unset/set pair runs in one transaction with the current default row
    locked, so concurrent switches serialize instead of leaving zero or two
    defaults. The partial unique constraint on `is_default` backs this up.
    """
    with transaction.atomic():
        rows = list(
            Language.objects.select_for_update().filter(Q(id=int(language_id)) | Q(is_default=True))
        )
        lang = next((r for r in rows if r.id == int(language_id)), None)
        if lang is None:
            raise Language.DoesNotExist(f"Language {language_id} not found")

        Language.objects.filter(is_default=True).exclude(id=lang.id).update(is_default=False)
        Language.objects.filter(id=lang.id).update(is_default=True, is_active=True)
        transaction.on_commit(invalidate_registry)

    invalidate_registry()
    lang.refresh_from_db()
    return lang
