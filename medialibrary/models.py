from __future__ import annotations

from django.db import models


class MediaItem(models.Model):
    image = models.ImageField(upload_to="media-library/%Y/%m/", width_field="width", height_field="height")
    # WEBP rendition generated on upload.
    thumbnail = models.ImageField(upload_to="media-library/thumbs/%Y/%m/", null=True, blank=True)

    filename = models.CharField(max_length=255)
    alt = models.CharField(max_length=255, blank=True, default="")
    size = models.PositiveIntegerField(default=0)
    width = models.PositiveIntegerField(null=True, blank=True)
    height = models.PositiveIntegerField(null=True, blank=True)
    mime_type = models.CharField(max_length=100, blank=True, default="")

    tags = models.JSONField(default=list, blank=True)
    category = models.CharField(max_length=100, blank=True, default="")

    # Deleting the project keeps the media item.
    project = models.ForeignKey(
        "projects.Project",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="media_items",
    )
    order = models.IntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["project", "order"], name="media_project_order_idx"),
            models.Index(fields=["category"], name="media_category_idx"),
        ]

    def __str__(self) -> str:
        return self.filename

    @property
    def original_url(self) -> str:
        if self.image:
            try:
                return self.image.url
            except Exception:
                return ""
        return ""

    @property
    def thumbnail_url(self) -> str:
        if self.thumbnail:
            try:
                return self.thumbnail.url
            except Exception:
                return ""
        return self.original_url
