from __future__ import annotations

from django.contrib import admin

from .models import ContactMessage


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ("created_at", "name", "email", "project_type", "read", "replied")
    list_filter = ("read", "replied", "project_type")
    search_fields = ("name", "email", "message")
    readonly_fields = ("name", "email", "project_type", "message", "privacy_accepted", "marketing_consent", "created_at")
    actions = ["mark_read"]

    @admin.action(description="Mark as read")
    def mark_read(self, request, queryset):
        updated = queryset.update(read=True)
        self.message_user(request, f"Marked as read: {updated}")
