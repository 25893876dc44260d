from __future__ import annotations

from django.db import transaction

from cms.richtext import coerce_document
from languages.registry import get_registry

from .models import ContentType, Project, ProjectImage, ProjectTranslation


class ProjectValidationError(ValueError):
    pass


def clean_materials(value) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return []
    return [str(m).strip() for m in value if str(m or "").strip()]


def _translation_rows(project: Project, translations: list[dict]) -> list[ProjectTranslation]:
    registry = get_registry()
    rows: list[ProjectTranslation] = []
    seen: set[int] = set()
    for t in translations or []:
        lang = registry.by_code(t.get("language_code") or "")
        if lang is None:
            raise ProjectValidationError(f"Unknown language: {t.get('language_code')}")
        if lang.id in seen:
            continue
        seen.add(lang.id)
        rows.append(
            ProjectTranslation(
                project=project,
                language_id=lang.id,
                title=(t.get("title") or "").strip(),
                description=coerce_document(t.get("description")),
                materials=clean_materials(t.get("materials")),
            )
        )
    return rows


def validate_translations(translations: list[dict]) -> None:
    if not any((t.get("title") or "").strip() for t in translations or []):
        raise ProjectValidationError("At least one translation with a title is required")


def _replace_images(project: Project, images: list[dict]) -> None:
    project.images.all().delete()
    ProjectImage.objects.bulk_create(
        [
            ProjectImage(
                project=project,
                original_url=(img.get("original_url") or "").strip(),
                thumbnail_url=(img.get("thumbnail_url") or "").strip(),
                alt=(img.get("alt") or "").strip(),
                order=int(img.get("order") if img.get("order") is not None else i),
            )
            for i, img in enumerate(images or [])
            if (img.get("original_url") or "").strip()
        ]
    )


def _get_content_type(content_type_id) -> ContentType:
    ct = ContentType.objects.filter(id=content_type_id).first() if content_type_id else None
    if ct is None:
        raise ProjectValidationError("Invalid content type")
    return ct


def create_project(
    *,
    content_type_id: int,
    translations: list[dict],
    images: list[dict] | None = None,
    featured: bool = False,
    published: bool = False,
    created_by=None,
) -> Project:
    validate_translations(translations)
    ct = _get_content_type(content_type_id)

    with transaction.atomic():
        project = Project.objects.create(
            content_type=ct,
            featured=bool(featured),
            published=bool(published),
            created_by=created_by,
        )
        ProjectTranslation.objects.bulk_create(_translation_rows(project, translations))
        _replace_images(project, images or [])
    return project


def update_project(
    project: Project,
    *,
    content_type_id: int | None = None,
    translations: list[dict] | None = None,
    images: list[dict] | None = None,
    featured: bool | None = None,
    published: bool | None = None,
) -> Project:
    """Update a project. Translations and images, when given, replace the current set."""
    if translations is not None:
        validate_translations(translations)

    with transaction.atomic():
        if content_type_id is not None:
            project.content_type = _get_content_type(content_type_id)
        if featured is not None:
            project.featured = bool(featured)
        if published is not None:
            project.published = bool(published)
        project.save()

        if translations is not None:
            rows = _translation_rows(project, translations)
            project.translations.all().delete()
            ProjectTranslation.objects.bulk_create(rows)
        if images is not None:
            _replace_images(project, images)
    return project


def toggle_flag(project: Project, field: str) -> Project:
    setattr(project, field, not getattr(project, field))
    project.save(update_fields=[field, "updated_at"])
    return project
