from __future__ import annotations

from django.contrib import admin

from .models import MediaItem


@admin.register(MediaItem)
class MediaItemAdmin(admin.ModelAdmin):
    list_display = ("id", "filename", "category", "project", "order", "size", "created_at")
    list_filter = ("category",)
    search_fields = ("filename", "alt")
    readonly_fields = ("thumbnail", "width", "height", "size", "mime_type", "created_at", "updated_at")
    raw_id_fields = ("project",)
