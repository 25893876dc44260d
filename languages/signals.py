from __future__ import annotations

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Language
from .registry import invalidate_registry


@receiver(post_save, sender=Language)
def language_saved(sender, instance: Language, **kwargs):
    invalidate_registry()


@receiver(post_delete, sender=Language)
def language_deleted(sender, instance: Language, **kwargs):
    invalidate_registry()
