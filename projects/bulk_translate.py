from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from django.db import transaction
from django.utils import timezone

from cms.richtext import document_from_text, extract_plain_text
from languages.provider import get_translation_provider, pacing_seconds
from languages.registry import get_registry

from .models import Project, ProjectTranslation

logger = logging.getLogger(__name__)


class BulkTranslationError(ValueError):
    """The batch cannot start (bad input or language setup)."""


class ProjectTranslationSkipped(Exception):
    pass


@dataclass
class BulkTranslationResult:
    success: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {"success": self.success, "failed": self.failed, "errors": list(self.errors)}


class _PacedProvider:
    """Sleeps `pacing` seconds before every provider call except the first."""

    def __init__(self, provider, pacing: float) -> None:
        self.provider = provider
        self.pacing = pacing
        self.calls = 0

    def translate(self, text: str, source_lang: str, target_langs: list[str]) -> dict[str, str]:
        if self.calls and self.pacing:
            time.sleep(self.pacing)
        self.calls += 1
        return self.provider.translate_text(text, source_lang, target_langs) or {}


def split_materials(text: str) -> list[str]:
    return [m.strip() for m in (text or "").split(",") if m.strip()]


def _translate_field(name: str, project_id, fn):
    # A failing field degrades to "no translation"; the project still succeeds.
    try:
        return fn()
    except Exception:
        logger.warning(
            "Translating %s failed",
            name,
            extra={"project_id": project_id, "field": name},
            exc_info=True,
        )
        return {}


def _translate_project(project_id, *, default, targets, paced: _PacedProvider) -> None:
    try:
        pk = int(project_id)
    except (TypeError, ValueError):
        raise ProjectTranslationSkipped(f"Project {project_id} not found")

    project = Project.objects.filter(id=pk).first()
    if project is None:
        raise ProjectTranslationSkipped(f"Project {project_id} not found")

    existing = {t.language_id: t for t in ProjectTranslation.objects.filter(project_id=pk)}
    source = existing.get(default.id)
    if source is None:
        raise ProjectTranslationSkipped(f"Project {project_id} has no default language translation")

    codes = [lang.code for lang in targets]

    titles: dict[str, str] = {}
    if source.title:
        titles = _translate_field("title", project_id, lambda: paced.translate(source.title, default.code, codes))

    descriptions: dict[str, dict] = {}
    plain = extract_plain_text(source.description) if source.description else ""
    if plain.strip():
        translated = _translate_field("description", project_id, lambda: paced.translate(plain, default.code, codes))
        for code, text in translated.items():
            if isinstance(text, str) and text.strip():
                descriptions[code] = document_from_text(text)

    materials: dict[str, list[str]] = {}
    if source.materials:
        joined = ", ".join(source.materials)
        translated = _translate_field("materials", project_id, lambda: paced.translate(joined, default.code, codes))
        for code, text in translated.items():
            if isinstance(text, str):
                materials[code] = split_materials(text)

    rows = []
    for lang in targets:
        current = existing.get(lang.id)
        rows.append(
            ProjectTranslation(
                project_id=pk,
                language_id=lang.id,
                title=titles.get(lang.code) or getattr(current, "title", "") or source.title,
                description=descriptions.get(lang.code) or getattr(current, "description", None) or source.description,
                materials=materials.get(lang.code) or getattr(current, "materials", None) or source.materials,
            )
        )

    # Languages outside the target set are left untouched.
    with transaction.atomic():
        ProjectTranslation.objects.bulk_create(
            rows,
            update_conflicts=True,
            unique_fields=["project", "language"],
            update_fields=["title", "description", "materials"],
        )
        Project.objects.filter(id=pk).update(updated_at=timezone.now())


def bulk_translate_projects(project_ids, *, provider=None, pacing: float | None = None) -> BulkTranslationResult:
    """Translate the default-language content of each project into every other active language.

    Projects are processed one at a time; a failure on one project is recorded
    in the result and does not stop the rest. Raises `BulkTranslationError`
    before any provider call when the batch cannot start.
    """
    if not isinstance(project_ids, (list, tuple)) or not project_ids:
        raise BulkTranslationError("Invalid project IDs")

    registry = get_registry()
    default = registry.default
    if default is None:
        raise BulkTranslationError("No default language found")
    targets = registry.target_languages
    if not targets:
        raise BulkTranslationError("No target languages available")

    provider = provider or get_translation_provider()
    if not provider.is_configured():
        raise BulkTranslationError("Translation provider is not configured")

    paced = _PacedProvider(provider, pacing_seconds() if pacing is None else pacing)
    result = BulkTranslationResult()

    for project_id in project_ids:
        try:
            _translate_project(project_id, default=default, targets=targets, paced=paced)
        except ProjectTranslationSkipped as exc:
            result.failed += 1
            result.errors.append(str(exc))
        except Exception as exc:
            logger.exception("Bulk translation failed", extra={"project_id": project_id})
            result.failed += 1
            result.errors.append(f"Project {project_id}: {exc}")
        else:
            result.success += 1

    logger.info(
        "Bulk translation finished: %s ok, %s failed of %s",
        result.success,
        result.failed,
        len(project_ids),
    )
    return result
