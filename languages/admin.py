from __future__ import annotations

from django.contrib import admin, messages

from .models import Language, Translation, TranslationKey
from .registry import set_default_language
from .services import get_translation_coverage


@admin.register(Language)
class LanguageAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "is_default", "is_active", "coverage_pct", "updated_at")
    list_filter = ("is_active", "is_default")
    search_fields = ("code", "name")
    readonly_fields = ("is_default",)
    actions = ["make_default"]

    @admin.display(description="Coverage")
    def coverage_pct(self, obj: Language) -> str:
        return f"{get_translation_coverage(obj.code) * 100:.0f}%"

    @admin.action(description="Set as default language")
    def make_default(self, request, queryset):
        if queryset.count() != 1:
            self.message_user(request, "Select exactly one language", level=messages.ERROR)
            return
        lang = set_default_language(queryset.first().id)
        self.message_user(request, f"{lang.code} is now the default language")


class TranslationInline(admin.TabularInline):
    model = Translation
    extra = 0
    fields = ("language", "value")


@admin.register(TranslationKey)
class TranslationKeyAdmin(admin.ModelAdmin):
    list_display = ("key", "description", "updated_at")
    search_fields = ("key", "description", "translations__value")
    inlines = [TranslationInline]
