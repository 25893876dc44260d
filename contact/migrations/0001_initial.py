from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ContactMessage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("email", models.EmailField(max_length=254)),
                ("project_type", models.CharField(max_length=100)),
                ("message", models.TextField()),
                ("privacy_accepted", models.BooleanField(default=False)),
                ("marketing_consent", models.BooleanField(default=False)),
                ("read", models.BooleanField(default=False)),
                ("replied", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["-created_at", "-id"]},
        ),
        migrations.AddIndex(
            model_name="contactmessage",
            index=models.Index(fields=["read", "created_at"], name="contact_read_created_idx"),
        ),
    ]
