from __future__ import annotations

import logging

from django.db import IntegrityError
from ninja import Router
from ninja.errors import HttpError
from ninja.pagination import PageNumberPagination, paginate

from accounts.auth import require_admin

from .models import Language, Translation, TranslationKey
from .registry import LanguageRegistryError, get_registry, set_default_language
from .schemas import (
    CoverageOut,
    LanguageAdminOut,
    LanguageIn,
    LanguageOut,
    LanguageUpdateIn,
    TranslationKeyIn,
    TranslationKeyOut,
    TranslationValuesIn,
)
from .services import (
    create_language,
    create_translation_key,
    delete_language,
    get_translation_coverage,
    normalize_code,
    schedule_auto_translate,
    translations_for_language,
    update_language,
    upsert_translation_values,
)

logger = logging.getLogger(__name__)

router = Router(tags=["languages"])
admin_router = Router(tags=["admin-languages"])


class KeyPagination(PageNumberPagination):
    page_size = 50
    max_page_size = 200


def _language_out(lang: Language, *, with_coverage: bool = False) -> dict:
    out = {
        "id": lang.id,
        "code": lang.code,
        "name": lang.name,
        "is_default": bool(lang.is_default),
        "is_active": bool(lang.is_active),
        "created_at": lang.created_at,
        "updated_at": lang.updated_at,
    }
    if with_coverage:
        out["coverage"] = get_translation_coverage(lang.code)
    return out


def _get_language(language_id: int) -> Language:
    lang = Language.objects.filter(id=int(language_id)).first()
    if lang is None:
        raise HttpError(404, "Language not found")
    return lang


def _key_out(tk: TranslationKey) -> dict:
    return {
        "id": tk.id,
        "key": tk.key,
        "description": tk.description or "",
        "values": {t.language.code: t.value for t in tk.translations.all()},
    }


# --- public ---


@router.get("/languages", response=list[LanguageOut])
def languages(request):
    return [
        {
            "id": lang.id,
            "code": lang.code,
            "name": lang.name,
            "is_default": lang.is_default,
            "is_active": lang.is_active,
        }
        for lang in get_registry().active
    ]


@router.get("/translations/{code}", response=dict[str, str])
def translations(request, code: str):
    if get_registry().active_by_code(code) is None:
        raise HttpError(404, "Language not found")
    return translations_for_language(code)


# --- admin: languages ---


@admin_router.get("/languages", response=list[LanguageAdminOut])
def admin_languages(request):
    require_admin(request)
    qs = Language.objects.order_by("-is_default", "-is_active", "code")
    return [_language_out(lang, with_coverage=True) for lang in qs]


@admin_router.post("/languages", response=LanguageAdminOut)
def admin_language_create(request, payload: LanguageIn):
    require_admin(request)
    if not normalize_code(payload.code) or not (payload.name or "").strip():
        raise HttpError(400, "Code and name are required")

    try:
        lang = create_language(
            code=payload.code,
            name=payload.name,
            is_default=payload.is_default,
            is_active=payload.is_active,
        )
    except IntegrityError:
        raise HttpError(409, "Language code already exists")
    except LanguageRegistryError as exc:
        raise HttpError(400, str(exc))

    if payload.auto_translate and not lang.is_default:
        schedule_auto_translate(lang.id)

    return _language_out(lang, with_coverage=True)


@admin_router.patch("/languages/{language_id}", response=LanguageAdminOut)
def admin_language_update(request, language_id: int, payload: LanguageUpdateIn):
    require_admin(request)
    lang = _get_language(language_id)
    try:
        lang = update_language(lang, name=payload.name, is_active=payload.is_active, is_default=payload.is_default)
    except LanguageRegistryError as exc:
        raise HttpError(400, str(exc))
    return _language_out(lang, with_coverage=True)


@admin_router.post("/languages/{language_id}/set-default", response=LanguageAdminOut)
def admin_language_set_default(request, language_id: int):
    require_admin(request)
    lang = _get_language(language_id)
    lang = set_default_language(lang.id)
    return _language_out(lang, with_coverage=True)


@admin_router.delete("/languages/{language_id}", response={204: None})
def admin_language_delete(request, language_id: int):
    require_admin(request)
    lang = _get_language(language_id)
    try:
        delete_language(lang)
    except LanguageRegistryError as exc:
        raise HttpError(400, str(exc))
    return 204, None


# --- admin: translation store ---


@admin_router.get("/translations/coverage", response=list[CoverageOut])
def admin_translation_coverage(request):
    require_admin(request)
    return [
        {"code": lang.code, "name": lang.name, "coverage": get_translation_coverage(lang.code)}
        for lang in get_registry().languages
    ]


@admin_router.get("/translations/keys", response=list[TranslationKeyOut])
@paginate(KeyPagination)
def admin_translation_keys(request, search: str = ""):
    require_admin(request)
    qs = TranslationKey.objects.prefetch_related("translations__language").order_by("key")
    if search.strip():
        qs = qs.filter(key__icontains=search.strip())
    return [_key_out(tk) for tk in qs]


@admin_router.post("/translations/keys", response=TranslationKeyOut)
def admin_translation_key_create(request, payload: TranslationKeyIn):
    require_admin(request)
    try:
        tk = create_translation_key(key=payload.key, description=payload.description, values=payload.values)
    except IntegrityError:
        raise HttpError(409, "Translation key already exists")
    except LanguageRegistryError as exc:
        raise HttpError(400, str(exc))
    tk = TranslationKey.objects.prefetch_related("translations__language").get(id=tk.id)
    return _key_out(tk)


@admin_router.put("/translations/keys/{key}/values", response=TranslationKeyOut)
def admin_translation_values(request, key: str, payload: TranslationValuesIn):
    require_admin(request)
    tk = TranslationKey.objects.filter(key=key).first()
    if tk is None:
        raise HttpError(404, "Translation key not found")
    upsert_translation_values(tk, payload.values)
    tk = TranslationKey.objects.prefetch_related("translations__language").get(id=tk.id)
    return _key_out(tk)


@admin_router.delete("/translations/keys/{key}", response={204: None})
def admin_translation_key_delete(request, key: str):
    require_admin(request)
    deleted, _ = TranslationKey.objects.filter(key=key).delete()
    if not deleted:
        raise HttpError(404, "Translation key not found")
    return 204, None


@admin_router.delete("/translations/keys/{key}/values/{code}", response={204: None})
def admin_translation_value_delete(request, key: str, code: str):
    require_admin(request)
    Translation.objects.filter(key__key=key, language__code=normalize_code(code)).delete()
    return 204, None
