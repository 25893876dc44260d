from __future__ import annotations

from django.db import models

from .richtext import empty_document


class ContentPage(models.Model):
    # Case-sensitive; format is enforced by cms.slugs before save.
    slug = models.CharField(max_length=200, unique=True)
    published = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["slug"]

    def __str__(self) -> str:
        return self.slug


class ContentPageTranslation(models.Model):
    page = models.ForeignKey(ContentPage, on_delete=models.CASCADE, related_name="translations")
    language = models.ForeignKey("languages.Language", on_delete=models.CASCADE, related_name="page_translations")

    title = models.CharField(max_length=255, blank=True, default="")
    content = models.JSONField(default=empty_document, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["page", "language"], name="uniq_page_translation_language"),
        ]

    def __str__(self) -> str:
        return f"{self.page_id} [{self.language_id}]"
