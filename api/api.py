from __future__ import annotations

import logging

from django.conf import settings
from django.db import IntegrityError
from ninja import NinjaAPI
from ninja.errors import ValidationError

from accounts.api import router as auth_router
from accounts.auth import AuthError
from analytics.api import admin_router as admin_analytics_router
from analytics.api import router as analytics_router
from cms.api import admin_router as admin_content_router
from cms.api import router as content_router
from contact.api import admin_router as admin_contact_router
from contact.api import router as contact_router
from languages.api import admin_router as admin_languages_router
from languages.api import router as languages_router
from medialibrary.api import admin_router as admin_media_router
from pagebuilder.api import router as page_builder_router
from projects.api import admin_router as admin_projects_router
from projects.api import router as projects_router

logger = logging.getLogger(__name__)

docs_url = "/docs" if getattr(settings, "NINJA_ENABLE_DOCS", True) else None
openapi_url = "/openapi.json" if getattr(settings, "NINJA_ENABLE_DOCS", True) else None

api = NinjaAPI(
    title="Portfolio CMS API",
    version="1",
    docs_url=docs_url,
    openapi_url=openapi_url,
)

api.add_router("/auth", auth_router)
api.add_router("", languages_router)
api.add_router("", projects_router)
api.add_router("/content", content_router)
api.add_router("/page-builder", page_builder_router)
api.add_router("/contact", contact_router)
api.add_router("/analytics", analytics_router)

api.add_router("/admin", admin_languages_router)
api.add_router("/admin/content", admin_content_router)
api.add_router("/admin", admin_projects_router)
api.add_router("/admin/media", admin_media_router)
api.add_router("/admin/contact", admin_contact_router)
api.add_router("/admin/analytics", admin_analytics_router)


@api.exception_handler(AuthError)
def auth_error(request, exc: AuthError):
    return api.create_response(request, {"detail": exc.message}, status=exc.status)


@api.exception_handler(ValidationError)
def validation_error(request, exc: ValidationError):
    return api.create_response(request, {"detail": "Invalid request", "errors": exc.errors}, status=400)


@api.exception_handler(IntegrityError)
def integrity_error(request, exc: IntegrityError):
    logger.warning("Unique constraint violated", extra={"path": request.path}, exc_info=True)
    return api.create_response(request, {"detail": "Conflict with existing data"}, status=409)


@api.exception_handler(Exception)
def unexpected_error(request, exc: Exception):
    logger.exception("Unhandled API error", extra={"path": request.path, "method": request.method})
    return api.create_response(request, {"detail": "Internal server error"}, status=500)


@api.get("/health")
def health(request):
    return {"status": "ok"}
