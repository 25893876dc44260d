from __future__ import annotations

from django.db import models


class PageLayout(models.Model):
    code = models.SlugField(max_length=64, unique=True, default="homepage")
    # Ordered component list, stored as one JSON document.
    components = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]

    def __str__(self) -> str:
        return self.code
