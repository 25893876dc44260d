from __future__ import annotations

from django.db import models


class ContactMessage(models.Model):
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254)
    project_type = models.CharField(max_length=100)
    message = models.TextField()

    privacy_accepted = models.BooleanField(default=False)
    marketing_consent = models.BooleanField(default=False)

    # Only changed by staff.
    read = models.BooleanField(default=False)
    replied = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["read", "created_at"], name="contact_read_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
