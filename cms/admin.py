from __future__ import annotations

from django.contrib import admin

from .models import ContentPage, ContentPageTranslation


class ContentPageTranslationInline(admin.StackedInline):
    model = ContentPageTranslation
    extra = 0
    fields = ("language", "title", "content")


@admin.register(ContentPage)
class ContentPageAdmin(admin.ModelAdmin):
    list_display = ("slug", "published", "updated_at")
    list_filter = ("published",)
    search_fields = ("slug", "translations__title")
    inlines = [ContentPageTranslationInline]
