from __future__ import annotations

from django.core.management.base import BaseCommand

from languages.models import Language
from languages.services import create_language

DEFAULT_LANGUAGES = [
    ("nl", "Nederlands"),
    ("fr", "Français"),
]


class Command(BaseCommand):
    help = "Create the initial languages (first one becomes default). Idempotent."

    def add_arguments(self, parser):
        parser.add_argument(
            "--language",
            action="append",
            default=[],
            help="code:name pair, repeatable (default: nl, fr)",
        )

    def handle(self, *args, **opts):
        pairs = []
        for raw in opts.get("language") or []:
            code, _, name = str(raw).partition(":")
            if not code.strip() or not name.strip():
                raise SystemExit(f"Invalid --language value: {raw!r} (expected code:name)")
            pairs.append((code.strip().lower(), name.strip()))
        pairs = pairs or DEFAULT_LANGUAGES

        created = 0
        for code, name in pairs:
            if Language.objects.filter(code=code).exists():
                continue
            create_language(code=code, name=name)
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Languages created: {created}"))
