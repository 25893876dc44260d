from __future__ import annotations

from django.db import models


class Language(models.Model):
    code = models.CharField(max_length=8, unique=True, help_text="ISO code, e.g. nl, fr, en")
    name = models.CharField(max_length=100)

    is_default = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_default", "-is_active", "code"]
        constraints = [
            # At most one row can carry the flag; services keep it at exactly one.
            models.UniqueConstraint(
                fields=["is_default"],
                condition=models.Q(is_default=True),
                name="uniq_language_single_default",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"


class TranslationKey(models.Model):
    key = models.CharField(max_length=255, unique=True)
    description = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key


class Translation(models.Model):
    key = models.ForeignKey(TranslationKey, on_delete=models.CASCADE, related_name="translations")
    language = models.ForeignKey(Language, on_delete=models.CASCADE, related_name="translations")
    value = models.TextField(blank=True, default="")

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["key", "language"], name="uniq_translation_key_language"),
        ]
        indexes = [
            models.Index(fields=["language", "key"], name="translation_lang_key_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.key_id} [{self.language_id}]"
