from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from analytics.models import AnalyticsEvent
from analytics.services import delete_events_older_than


class Command(BaseCommand):
    help = "Delete analytics events older than the retention window."

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Retention in days (default: ANALYTICS_RETENTION_DAYS).",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only print how many events would be deleted.",
        )

    def handle(self, *args, **options):
        days = options.get("days")
        if days is None:
            days = int(getattr(settings, "ANALYTICS_RETENTION_DAYS", 365) or 365)
        if days < 1:
            self.stderr.write(self.style.ERROR("--days must be at least 1"))
            return

        if options.get("dry_run"):
            cutoff = timezone.now() - timedelta(days=days)
            count = AnalyticsEvent.objects.filter(created_at__lt=cutoff).count()
            self.stdout.write(self.style.WARNING(f"dry-run: would delete analytics events: {count}"))
            return

        deleted = delete_events_older_than(days)
        self.stdout.write(self.style.SUCCESS(f"Deleted analytics events: {deleted}"))
