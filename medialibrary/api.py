from __future__ import annotations

from django.db.models import Q
from ninja import File, Form, Router
from ninja.errors import HttpError
from ninja.files import UploadedFile
from ninja.pagination import PageNumberPagination, paginate

from accounts.auth import require_admin

from .models import MediaItem
from .schemas import MediaItemOut, MediaItemUpdateIn, ReorderIn, ReorderOut
from .services import MediaValidationError, create_media_item, delete_media_item, reorder_media, update_media_item

admin_router = Router(tags=["admin-media"])


class MediaPagination(PageNumberPagination):
    page_size = 48
    max_page_size = 200


def _media_out(m: MediaItem) -> dict:
    return {
        "id": m.id,
        "filename": m.filename,
        "original_url": m.original_url,
        "thumbnail_url": m.thumbnail_url,
        "alt": m.alt,
        "size": m.size,
        "width": m.width,
        "height": m.height,
        "mime_type": m.mime_type,
        "tags": list(m.tags or []),
        "category": m.category,
        "project_id": m.project_id,
        "order": m.order,
        "created_at": m.created_at,
    }


def _get_item(media_id: int) -> MediaItem:
    item = MediaItem.objects.filter(id=int(media_id)).first()
    if item is None:
        raise HttpError(404, "Media item not found")
    return item


@admin_router.get("", response=list[MediaItemOut], by_alias=True)
@paginate(MediaPagination)
def admin_media(
    request,
    search: str = "",
    category: str = "",
    tag: str = "",
    project_id: int | None = None,
    unassigned: bool = False,
):
    require_admin(request)
    qs = MediaItem.objects.all()
    if search.strip():
        s = search.strip()
        qs = qs.filter(Q(alt__icontains=s) | Q(filename__icontains=s))
    if category.strip():
        qs = qs.filter(category=category.strip())
    if unassigned:
        qs = qs.filter(project__isnull=True)
    elif project_id is not None:
        qs = qs.filter(project_id=project_id).order_by("order", "id")

    items = list(qs)
    if tag.strip():
        # JSON containment lookups are not portable to SQLite.
        t = tag.strip().lower()
        items = [m for m in items if t in (m.tags or [])]
    return [_media_out(m) for m in items]


@admin_router.post("", response={201: MediaItemOut}, by_alias=True)
def admin_media_upload(
    request,
    file: UploadedFile = File(...),
    alt: str = Form(""),
    category: str = Form(""),
    tags: str = Form(""),
    project_id: int | None = Form(None),
):
    require_admin(request)
    try:
        item = create_media_item(file, alt=alt, category=category, tags=tags, project_id=project_id)
    except MediaValidationError as exc:
        raise HttpError(400, str(exc))
    return 201, _media_out(item)


@admin_router.post("/reorder", response=ReorderOut)
def admin_media_reorder(request, payload: ReorderIn):
    require_admin(request)
    return {"updated": reorder_media(project_id=payload.project_id, ids=payload.ids)}


@admin_router.get("/{media_id}", response=MediaItemOut, by_alias=True)
def admin_media_detail(request, media_id: int):
    require_admin(request)
    return _media_out(_get_item(media_id))


@admin_router.patch("/{media_id}", response=MediaItemOut, by_alias=True)
def admin_media_update(request, media_id: int, payload: MediaItemUpdateIn):
    require_admin(request)
    item = _get_item(media_id)
    try:
        item = update_media_item(item, payload.model_dump(exclude_unset=True))
    except MediaValidationError as exc:
        raise HttpError(400, str(exc))
    return _media_out(item)


@admin_router.delete("/{media_id}", response={204: None})
def admin_media_delete(request, media_id: int):
    require_admin(request)
    delete_media_item(_get_item(media_id))
    return 204, None
