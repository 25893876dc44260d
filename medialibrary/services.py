from __future__ import annotations

import logging
from io import BytesIO

from django.conf import settings
from django.core.files.base import ContentFile
from django.db import transaction
from PIL import Image, UnidentifiedImageError

from projects.models import Project

from .models import MediaItem

logger = logging.getLogger(__name__)


class MediaValidationError(ValueError):
    pass


def clean_tags(value) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return []
    out: list[str] = []
    for t in value:
        t = str(t or "").strip().lower()
        if t and t not in out:
            out.append(t)
    return out


def _max_upload_bytes() -> int:
    return int(getattr(settings, "MEDIA_MAX_UPLOAD_MB", 10) or 10) * 1024 * 1024


def _get_project(project_id) -> Project | None:
    if project_id in (None, "", 0):
        return None
    project = Project.objects.filter(id=int(project_id)).first()
    if project is None:
        raise MediaValidationError("Project not found")
    return project


def _thumbnail(img: Image.Image) -> bytes:
    edge = int(getattr(settings, "MEDIA_THUMB_SIZE", 400) or 400)
    rendition = img.copy()
    if rendition.mode != "RGB":
        rendition = rendition.convert("RGB")
    if max(rendition.size) > edge:
        rendition.thumbnail((edge, edge))
    buf = BytesIO()
    rendition.save(buf, format="WEBP", quality=78, method=6)
    return buf.getvalue()


def create_media_item(
    upload,
    *,
    alt: str = "",
    category: str = "",
    tags=None,
    project_id: int | None = None,
    order: int | None = None,
) -> MediaItem:
    """Store an uploaded image with its WEBP thumbnail and metadata.

    Raises `MediaValidationError` for non-images, oversized files and unknown projects.
    """
    content_type = (getattr(upload, "content_type", "") or "").lower()
    if not content_type.startswith("image/"):
        raise MediaValidationError("Only image files are allowed")
    if int(upload.size or 0) > _max_upload_bytes():
        raise MediaValidationError("File is too large")

    try:
        img = Image.open(upload)
        img.load()
    except (UnidentifiedImageError, OSError):
        raise MediaValidationError("Invalid image file")
    upload.seek(0)

    project = _get_project(project_id)
    filename = (getattr(upload, "name", "") or "image").rsplit("/", 1)[-1]
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename

    item = MediaItem(
        filename=filename,
        alt=(alt or "").strip(),
        size=int(upload.size or 0),
        mime_type=content_type,
        tags=clean_tags(tags),
        category=(category or "").strip(),
        project=project,
        order=order,
    )
    item.image.save(filename, upload, save=False)

    try:
        item.thumbnail.save(f"{stem}_t.webp", ContentFile(_thumbnail(img)), save=False)
    except Exception:
        # The original is still usable; thumbnail_url falls back to it.
        logger.warning("Thumbnail generation failed", extra={"media_filename": filename}, exc_info=True)

    item.save()
    return item


def update_media_item(item: MediaItem, data: dict) -> MediaItem:
    """Apply a partial update; keys absent from `data` are left unchanged."""
    if "alt" in data:
        item.alt = (data["alt"] or "").strip()
    if "category" in data:
        item.category = (data["category"] or "").strip()
    if "tags" in data:
        item.tags = clean_tags(data["tags"])
    if "project_id" in data:
        item.project = _get_project(data["project_id"])
    if "order" in data:
        item.order = data["order"]
    item.save()
    return item


def delete_media_item(item: MediaItem) -> None:
    image_name = item.image.name if item.image else ""
    thumb_name = item.thumbnail.name if item.thumbnail else ""
    storage = item.image.storage
    item.delete()

    def _cleanup():
        for name in (image_name, thumb_name):
            if not name:
                continue
            try:
                storage.delete(name)
            except Exception:
                logger.warning("Media file cleanup failed", extra={"file": name}, exc_info=True)

    transaction.on_commit(_cleanup)


def reorder_media(*, project_id: int | None, ids: list[int]) -> int:
    """Set `order` to the list position for each id belonging to the project."""
    qs = MediaItem.objects.filter(id__in=ids)
    qs = qs.filter(project_id=project_id) if project_id else qs.filter(project__isnull=True)
    items = {m.id: m for m in qs}

    updated = []
    for position, media_id in enumerate(ids):
        item = items.get(media_id)
        if item is None:
            continue
        item.order = position
        updated.append(item)
    with transaction.atomic():
        MediaItem.objects.bulk_update(updated, ["order"])
    return len(updated)
