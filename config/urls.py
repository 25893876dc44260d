from __future__ import annotations

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path

from api.api import api

base = (getattr(settings, "API_BASE_PATH", "api") or "api").strip("/")

urlpatterns = [
    path("admin/", admin.site.urls),
    path(f"{base}/", api.urls),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
