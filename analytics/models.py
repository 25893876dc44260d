from __future__ import annotations

import uuid

from django.db import models


class CookieConsent(models.Model):
    session_id = models.CharField(max_length=128, unique=True)

    necessary = models.BooleanField(default=True)
    analytics = models.BooleanField(default=False)
    marketing = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.session_id


class AnalyticsEvent(models.Model):
    class EventType(models.TextChoices):
        PAGEVIEW = "pageview", "Page view"
        CLICK = "click", "Click"
        CONTACT_SUBMIT = "contact_submit", "Contact submit"
        PROJECT_VIEW = "project_view", "Project view"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    session_id = models.CharField(max_length=128)
    page_path = models.CharField(max_length=500)
    page_title = models.CharField(max_length=255, blank=True, default="")
    referrer = models.CharField(max_length=1000, blank=True, default="")
    user_agent = models.CharField(max_length=500, blank=True, default="")
    language = models.CharField(max_length=16, blank=True, default="")
    country = models.CharField(max_length=64, blank=True, default="")

    # Free-form: custom event names are accepted alongside the known ones.
    event_type = models.CharField(max_length=64, default=EventType.PAGEVIEW)
    metadata = models.JSONField(blank=True, default=dict)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["event_type", "created_at"], name="analytics_type_created_idx"),
            models.Index(fields=["page_path", "created_at"], name="analytics_path_created_idx"),
            models.Index(fields=["session_id"], name="analytics_session_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_type} {self.page_path}"
