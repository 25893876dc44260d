from __future__ import annotations

from django.contrib import admin

from .models import PageLayout


@admin.register(PageLayout)
class PageLayoutAdmin(admin.ModelAdmin):
    list_display = ("code", "component_count", "updated_at")
    search_fields = ("code",)
    readonly_fields = ("created_at", "updated_at")

    @admin.display(description="Components")
    def component_count(self, obj: PageLayout) -> int:
        return len(obj.components or [])
