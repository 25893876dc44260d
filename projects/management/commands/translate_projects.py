from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from projects.bulk_translate import BulkTranslationError, bulk_translate_projects
from projects.models import Project


class Command(BaseCommand):
    help = "Translate projects from the default language into every other active language."

    def add_arguments(self, parser):
        parser.add_argument("project_ids", nargs="*", type=int, help="Project ids (default: all projects)")
        parser.add_argument(
            "--published-only",
            action="store_true",
            help="With no ids given, only translate published projects.",
        )

    def handle(self, *args, **options):
        ids = list(options.get("project_ids") or [])
        if not ids:
            qs = Project.objects.order_by("id")
            if options.get("published_only"):
                qs = qs.filter(published=True)
            ids = list(qs.values_list("id", flat=True))

        try:
            result = bulk_translate_projects(ids)
        except BulkTranslationError as exc:
            raise CommandError(str(exc))

        for err in result.errors:
            self.stdout.write(self.style.WARNING(err))
        self.stdout.write(
            self.style.SUCCESS(f"Translated projects: {result.success} ok, {result.failed} failed of {len(ids)}")
        )
