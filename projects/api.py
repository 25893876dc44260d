from __future__ import annotations

import logging

from django.db.models import Prefetch, Q
from ninja import Router
from ninja.errors import HttpError
from ninja.pagination import PageNumberPagination, paginate

from accounts.auth import require_admin
from api.i18n import get_request_language_code, pick_best_translation
from cms.richtext import coerce_document, render_html

from .bulk_translate import BulkTranslationError, bulk_translate_projects
from .models import ContentType, Project, ProjectTranslation
from .schemas import (
    ContentTypeIn,
    ContentTypeOut,
    ProjectAdminOut,
    ProjectIn,
    ProjectOut,
    ProjectUpdateIn,
    TranslateAllIn,
    TranslateAllOut,
)
from .services import ProjectValidationError, create_project, toggle_flag, update_project

logger = logging.getLogger(__name__)

router = Router(tags=["projects"])
admin_router = Router(tags=["admin-projects"])


class ProjectPagination(PageNumberPagination):
    page_size = 12
    max_page_size = 100


def _base_qs():
    return Project.objects.select_related("content_type", "created_by").prefetch_related(
        Prefetch("translations", queryset=ProjectTranslation.objects.select_related("language")),
        "images",
    )


def _images_out(project: Project) -> list[dict]:
    return [
        {"original_url": i.original_url, "thumbnail_url": i.thumbnail_url, "alt": i.alt, "order": i.order}
        for i in sorted(project.images.all(), key=lambda i: (i.order, i.id))
    ]


def _public_out(project: Project, language_code: str | None) -> dict:
    best = pick_best_translation(project.translations.all(), language_code)
    description = coerce_document(getattr(best, "description", None))
    ct = project.content_type
    return {
        "id": project.id,
        "content_type": {"id": ct.id, "name": ct.name, "display_name": ct.display_name},
        "featured": project.featured,
        "language_code": best.language.code if best is not None else "",
        "title": getattr(best, "title", "") or "",
        "description": description,
        "description_html": render_html(description),
        "materials": list(getattr(best, "materials", None) or []),
        "images": _images_out(project),
        "created_at": project.created_at,
    }


def _admin_out(project: Project) -> dict:
    return {
        "id": project.id,
        "content_type_id": project.content_type_id,
        "featured": project.featured,
        "published": project.published,
        "created_by": project.created_by.label if project.created_by_id else None,
        "translations": [
            {
                "language_code": t.language.code,
                "title": t.title,
                "description": coerce_document(t.description),
                "materials": list(t.materials or []),
            }
            for t in sorted(project.translations.all(), key=lambda t: t.language.code)
        ],
        "images": _images_out(project),
        "created_at": project.created_at,
        "updated_at": project.updated_at,
    }


def _get_project(project_id: int) -> Project:
    project = _base_qs().filter(id=int(project_id)).first()
    if project is None:
        raise HttpError(404, "Project not found")
    return project


# --- public ---


@router.get("/content-types", response=list[ContentTypeOut])
def content_types(request):
    return list(ContentType.objects.order_by("name").values("id", "name", "display_name"))


@router.get("/projects", response=list[ProjectOut])
@paginate(ProjectPagination)
def projects(
    request,
    search: str = "",
    featured: bool | None = None,
    content_type: str = "",
    language_code: str | None = None,
):
    if language_code is None:
        language_code = get_request_language_code(request)

    qs = _base_qs().filter(published=True)
    if featured is not None:
        qs = qs.filter(featured=featured)
    if content_type.strip():
        qs = qs.filter(content_type__name=content_type.strip())
    if search.strip():
        qs = qs.filter(translations__title__icontains=search.strip()).distinct()

    return [_public_out(p, language_code) for p in qs.order_by("-featured", "-created_at", "-id")]


@router.get("/projects/{project_id}", response=ProjectOut)
def project_detail(request, project_id: int, language_code: str | None = None):
    if language_code is None:
        language_code = get_request_language_code(request)
    project = _base_qs().filter(id=int(project_id), published=True).first()
    if project is None:
        raise HttpError(404, "Project not found")
    return _public_out(project, language_code)


# --- admin ---


@admin_router.post("/content-types", response={201: ContentTypeOut})
def admin_content_type_create(request, payload: ContentTypeIn):
    require_admin(request)
    name = (payload.name or "").strip().lower()
    if not name:
        raise HttpError(400, "Name is required")
    if ContentType.objects.filter(name=name).exists():
        raise HttpError(409, "Content type already exists")
    ct = ContentType.objects.create(name=name, display_name=(payload.display_name or "").strip() or name.title())
    return 201, {"id": ct.id, "name": ct.name, "display_name": ct.display_name}


@admin_router.get("/projects", response=list[ProjectAdminOut], by_alias=True)
@paginate(ProjectPagination)
def admin_projects(
    request,
    search: str = "",
    published: bool | None = None,
    featured: bool | None = None,
):
    require_admin(request)
    qs = _base_qs()
    if published is not None:
        qs = qs.filter(published=published)
    if featured is not None:
        qs = qs.filter(featured=featured)
    if search.strip():
        s = search.strip()
        qs = qs.filter(Q(translations__title__icontains=s) | Q(content_type__display_name__icontains=s)).distinct()
    return [_admin_out(p) for p in qs.order_by("-created_at", "-id")]


@admin_router.post("/projects/translate-all", response=TranslateAllOut)
def admin_projects_translate_all(request, payload: TranslateAllIn):
    require_admin(request)
    ids = payload.project_ids
    try:
        result = bulk_translate_projects(ids)
    except BulkTranslationError as exc:
        raise HttpError(400, str(exc))
    return {"success": True, "results": {"total": len(ids), **result.as_dict()}}


@admin_router.get("/projects/{project_id}", response=ProjectAdminOut, by_alias=True)
def admin_project_detail(request, project_id: int):
    require_admin(request)
    return _admin_out(_get_project(project_id))


@admin_router.post("/projects", response={201: ProjectAdminOut}, by_alias=True)
def admin_project_create(request, payload: ProjectIn):
    user = require_admin(request)
    try:
        project = create_project(
            content_type_id=payload.content_type_id,
            featured=payload.featured,
            published=payload.published,
            translations=[t.model_dump() for t in payload.translations],
            images=[i.model_dump() for i in payload.images],
            created_by=user,
        )
    except ProjectValidationError as exc:
        raise HttpError(400, str(exc))
    return 201, _admin_out(_get_project(project.id))


@admin_router.put("/projects/{project_id}", response=ProjectAdminOut, by_alias=True)
def admin_project_update(request, project_id: int, payload: ProjectUpdateIn):
    require_admin(request)
    project = _get_project(project_id)
    try:
        update_project(
            project,
            content_type_id=payload.content_type_id,
            featured=payload.featured,
            published=payload.published,
            translations=None if payload.translations is None else [t.model_dump() for t in payload.translations],
            images=None if payload.images is None else [i.model_dump() for i in payload.images],
        )
    except ProjectValidationError as exc:
        raise HttpError(400, str(exc))
    return _admin_out(_get_project(project.id))


@admin_router.post("/projects/{project_id}/toggle-featured", response=ProjectAdminOut, by_alias=True)
def admin_project_toggle_featured(request, project_id: int):
    require_admin(request)
    toggle_flag(_get_project(project_id), "featured")
    return _admin_out(_get_project(project_id))


@admin_router.post("/projects/{project_id}/toggle-published", response=ProjectAdminOut, by_alias=True)
def admin_project_toggle_published(request, project_id: int):
    require_admin(request)
    toggle_flag(_get_project(project_id), "published")
    return _admin_out(_get_project(project_id))


@admin_router.delete("/projects/{project_id}", response={204: None})
def admin_project_delete(request, project_id: int):
    require_admin(request)
    # Media items keep existing; their project reference is nulled.
    deleted, _ = Project.objects.filter(id=int(project_id)).delete()
    if not deleted:
        raise HttpError(404, "Project not found")
    return 204, None
