from __future__ import annotations

import logging
import threading
import time

from django.conf import settings
from django.db import close_old_connections, transaction

from .models import Language, Translation, TranslationKey
from .provider import TranslationProviderError, get_translation_provider, pacing_seconds
from .registry import LanguageRegistryError, get_registry, invalidate_registry, set_default_language

logger = logging.getLogger(__name__)


def normalize_code(code: str | None) -> str:
    return (code or "").strip().lower()


def create_language(*, code: str, name: str, is_default: bool = False, is_active: bool = True) -> Language:
    """Create a language; the first language ever created becomes the default.

    Raises `IntegrityError` when the code already exists.
    """
    code = normalize_code(code)
    name = (name or "").strip()
    if not code or not name:
        raise LanguageRegistryError("Code and name are required")

    with transaction.atomic():
        make_default = bool(is_default) or not Language.objects.filter(is_default=True).exists()
        lang = Language.objects.create(code=code, name=name, is_default=False, is_active=bool(is_active) or make_default)

    if make_default:
        lang = set_default_language(lang.id)
    invalidate_registry()
    return lang


def update_language(
    language: Language,
    *,
    name: str | None = None,
    is_active: bool | None = None,
    is_default: bool | None = None,
) -> Language:
    if is_default is False and language.is_default:
        raise LanguageRegistryError("Set another language as default instead")
    if is_active is False and (language.is_default or is_default):
        raise LanguageRegistryError("The default language cannot be deactivated")

    fields: list[str] = []
    if name is not None:
        if not name.strip():
            raise LanguageRegistryError("Name cannot be empty")
        language.name = name.strip()
        fields.append("name")
    if is_active is not None:
        language.is_active = bool(is_active)
        fields.append("is_active")
    if fields:
        language.save(update_fields=[*fields, "updated_at"])

    if is_default and not language.is_default:
        language = set_default_language(language.id)

    invalidate_registry()
    return language


def delete_language(language: Language) -> None:
    if language.is_default:
        raise LanguageRegistryError("The default language cannot be deleted")
    language.delete()
    invalidate_registry()


def get_translation_coverage(language_code: str) -> float:
    """Fraction of translation keys with a non-empty value in `language_code`.

    No keys at all yields 0.0.
    """
    total = TranslationKey.objects.count()
    if total == 0:
        return 0.0
    translated = (
        Translation.objects.filter(language__code=normalize_code(language_code))
        .exclude(value="")
        .count()
    )
    return translated / total


def translations_for_language(language_code: str) -> dict[str, str]:
    """UI strings for one language, missing values filled from the default language."""
    registry = get_registry()
    requested = normalize_code(language_code)
    default = registry.default_code

    codes = [c for c in (default, requested) if c]
    rows = (
        Translation.objects.filter(language__code__in=codes)
        .exclude(value="")
        .values_list("key__key", "language__code", "value")
    )

    out: dict[str, str] = {k: "" for k in TranslationKey.objects.values_list("key", flat=True)}
    # Default first so requested-language values overwrite.
    by_lang: dict[str, dict[str, str]] = {}
    for key, code, value in rows:
        by_lang.setdefault(code, {})[key] = value
    for code in codes:
        out.update(by_lang.get(code, {}))
    return out


def upsert_translation_values(key: TranslationKey, values: dict[str, str]) -> int:
    """Insert or update per-language values for `key` in one statement.

    Unknown language codes are ignored. Returns the number of rows written.
    """
    registry = get_registry()
    rows = []
    for code, value in (values or {}).items():
        lang = registry.by_code(code)
        if lang is None:
            continue
        rows.append(Translation(key=key, language_id=lang.id, value=value or ""))
    if not rows:
        return 0

    Translation.objects.bulk_create(
        rows,
        update_conflicts=True,
        unique_fields=["key", "language"],
        update_fields=["value", "updated_at"],
    )
    return len(rows)


def create_translation_key(*, key: str, description: str = "", values: dict[str, str] | None = None) -> TranslationKey:
    """Raises `IntegrityError` when the key already exists."""
    k = (key or "").strip()
    if not k:
        raise LanguageRegistryError("Key is required")
    with transaction.atomic():
        tk = TranslationKey.objects.create(key=k, description=(description or "").strip())
        if values:
            upsert_translation_values(tk, values)
    return tk


def auto_translate_keys(language_id: int, *, provider=None, pacing: float | None = None) -> dict[str, int]:
    """Translate every key's default-language value into `language_id`.

    Keys that already have a value in the target language are skipped.
    A provider failure on one key is logged and does not stop the rest.
    """
    provider = provider or get_translation_provider()
    pacing = pacing_seconds() if pacing is None else pacing

    target = Language.objects.filter(id=int(language_id)).first()
    registry = get_registry()
    source_code = registry.default_code
    result = {"translated": 0, "skipped": 0, "failed": 0}

    if target is None or not source_code or target.code == source_code:
        return result
    if not provider.is_configured():
        logger.info("Translation provider not configured, skipping auto-translate for %s", target.code)
        return result

    source_rows = list(
        Translation.objects.filter(language__code=source_code)
        .exclude(value="")
        .select_related("key")
        .order_by("key__key")
    )
    existing = set(
        Translation.objects.filter(language_id=target.id).exclude(value="").values_list("key_id", flat=True)
    )

    first = True
    for row in source_rows:
        if row.key_id in existing:
            result["skipped"] += 1
            continue
        if not first and pacing:
            time.sleep(pacing)
        first = False
        try:
            translated = provider.translate_text(row.value, source_code, [target.code]).get(target.code, "")
        except TranslationProviderError:
            logger.warning("Auto-translate failed", extra={"key": row.key.key, "language": target.code}, exc_info=True)
            result["failed"] += 1
            continue
        if translated:
            upsert_translation_values(row.key, {target.code: translated})
            result["translated"] += 1

    logger.info("Auto-translate into %s finished: %s", target.code, result)
    return result


def _auto_translate_in_background(language_id: int) -> None:
    try:
        auto_translate_keys(language_id)
    except Exception:
        logger.exception("Auto-translate crashed", extra={"language_id": language_id})
    finally:
        close_old_connections()


def schedule_auto_translate(language_id: int) -> None:
    """Fire-and-forget: start auto-translation after the current transaction commits."""
    if not getattr(settings, "AUTO_TRANSLATE_NEW_LANGUAGE", True):
        return

    def _start():
        threading.Thread(
            target=_auto_translate_in_background,
            args=(int(language_id),),
            name=f"auto-translate-{language_id}",
            daemon=True,
        ).start()

    transaction.on_commit(_start)
