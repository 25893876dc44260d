from __future__ import annotations

from django.contrib import admin

from .models import AnalyticsEvent, CookieConsent


@admin.register(AnalyticsEvent)
class AnalyticsEventAdmin(admin.ModelAdmin):
    list_display = ("created_at", "event_type", "page_path", "session_id", "language", "country")
    list_filter = ("event_type", "language", "created_at")
    search_fields = ("session_id", "page_path", "page_title")
    ordering = ("-created_at",)


@admin.register(CookieConsent)
class CookieConsentAdmin(admin.ModelAdmin):
    list_display = ("session_id", "necessary", "analytics", "marketing", "updated_at")
    list_filter = ("analytics", "marketing")
    search_fields = ("session_id",)
