from __future__ import annotations

from django.contrib import admin, messages

from .bulk_translate import BulkTranslationError, bulk_translate_projects
from .models import ContentType, Project, ProjectImage, ProjectTranslation


class ProjectTranslationInline(admin.StackedInline):
    model = ProjectTranslation
    extra = 0
    fields = ("language", "title", "description", "materials")


class ProjectImageInline(admin.TabularInline):
    model = ProjectImage
    extra = 0
    fields = ("order", "original_url", "thumbnail_url", "alt")


@admin.register(ContentType)
class ContentTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "display_name", "created_at")
    search_fields = ("name", "display_name")


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "content_type", "featured", "published", "updated_at")
    list_filter = ("published", "featured", "content_type")
    search_fields = ("translations__title",)
    inlines = [ProjectTranslationInline, ProjectImageInline]
    actions = ["translate_selected"]

    @admin.display(description="Title")
    def title(self, obj: Project) -> str:
        t = obj.translations.filter(language__is_default=True).first() or obj.translations.first()
        return t.title if t is not None else ""

    @admin.action(description="Translate into all active languages")
    def translate_selected(self, request, queryset):
        try:
            result = bulk_translate_projects(list(queryset.values_list("id", flat=True)))
        except BulkTranslationError as exc:
            self.message_user(request, str(exc), level=messages.ERROR)
            return
        self.message_user(request, f"Translated: {result.success}, failed: {result.failed}")
        for err in result.errors:
            self.message_user(request, err, level=messages.WARNING)
