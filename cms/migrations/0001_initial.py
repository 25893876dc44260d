from __future__ import annotations

from django.db import migrations, models
import django.db.models.deletion

import cms.richtext


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("languages", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ContentPage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.CharField(max_length=200, unique=True)),
                ("published", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["slug"]},
        ),
        migrations.CreateModel(
            name="ContentPageTranslation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(blank=True, default="", max_length=255)),
                ("content", models.JSONField(blank=True, default=cms.richtext.empty_document)),
                ("language", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="page_translations", to="languages.language")),
                ("page", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="translations", to="cms.contentpage")),
            ],
        ),
        migrations.AddConstraint(
            model_name="contentpagetranslation",
            constraint=models.UniqueConstraint(fields=("page", "language"), name="uniq_page_translation_language"),
        ),
    ]
