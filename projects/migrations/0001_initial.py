from __future__ import annotations

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

import cms.richtext


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("languages", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ContentType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.SlugField(max_length=64, unique=True)),
                ("display_name", models.CharField(max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("featured", models.BooleanField(default=False)),
                ("published", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("content_type", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="projects", to="projects.contenttype")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="projects", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ["-created_at", "-id"]},
        ),
        migrations.AddIndex(
            model_name="project",
            index=models.Index(fields=["published", "featured"], name="project_pub_featured_idx"),
        ),
        migrations.CreateModel(
            name="ProjectTranslation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(blank=True, default="", max_length=255)),
                ("description", models.JSONField(blank=True, default=cms.richtext.empty_document)),
                ("materials", models.JSONField(blank=True, default=list)),
                ("language", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="project_translations", to="languages.language")),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="translations", to="projects.project")),
            ],
        ),
        migrations.AddConstraint(
            model_name="projecttranslation",
            constraint=models.UniqueConstraint(fields=("project", "language"), name="uniq_project_translation_language"),
        ),
        migrations.CreateModel(
            name="ProjectImage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("original_url", models.CharField(max_length=500)),
                ("thumbnail_url", models.CharField(blank=True, default="", max_length=500)),
                ("alt", models.CharField(blank=True, default="", max_length=255)),
                ("order", models.IntegerField(default=0)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="images", to="projects.project")),
            ],
            options={"ordering": ["order", "id"]},
        ),
    ]
