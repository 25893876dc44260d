from __future__ import annotations

from django.conf import settings
from django.db import models

from cms.richtext import empty_document


class ContentType(models.Model):
    name = models.SlugField(max_length=64, unique=True)
    display_name = models.CharField(max_length=100)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.display_name or self.name


class Project(models.Model):
    content_type = models.ForeignKey(ContentType, on_delete=models.PROTECT, related_name="projects")
    featured = models.BooleanField(default=False)
    published = models.BooleanField(default=False)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="projects",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["published", "featured"], name="project_pub_featured_idx"),
        ]

    def __str__(self) -> str:
        return f"Project {self.id}"


class ProjectTranslation(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="translations")
    language = models.ForeignKey("languages.Language", on_delete=models.CASCADE, related_name="project_translations")

    title = models.CharField(max_length=255, blank=True, default="")
    description = models.JSONField(default=empty_document, blank=True)
    materials = models.JSONField(default=list, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["project", "language"], name="uniq_project_translation_language"),
        ]

    def __str__(self) -> str:
        return f"{self.project_id} [{self.language_id}] {self.title}"


class ProjectImage(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="images")
    original_url = models.CharField(max_length=500)
    thumbnail_url = models.CharField(max_length=500, blank=True, default="")
    alt = models.CharField(max_length=255, blank=True, default="")
    # Display sequence; gaps are allowed.
    order = models.IntegerField(default=0)

    class Meta:
        ordering = ["order", "id"]

    def __str__(self) -> str:
        return f"{self.project_id}: {self.original_url}"
