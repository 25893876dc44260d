from __future__ import annotations

import logging
from datetime import datetime, timedelta

from django.db.models import Count
from django.db.models.functions import TruncDate
from django.utils import timezone

from .models import AnalyticsEvent, CookieConsent

logger = logging.getLogger(__name__)

PAGEVIEW = AnalyticsEvent.EventType.PAGEVIEW


def _clip(value, max_length: int) -> str:
    return str(value or "").strip()[:max_length]


def save_consent(*, session_id: str, analytics: bool, marketing: bool) -> CookieConsent:
    consent, _ = CookieConsent.objects.update_or_create(
        session_id=_clip(session_id, 128),
        defaults={"necessary": True, "analytics": bool(analytics), "marketing": bool(marketing)},
    )
    return consent


def has_analytics_consent(session_id: str) -> bool:
    return CookieConsent.objects.filter(session_id=session_id, analytics=True).exists()


def track_event(
    *,
    session_id: str,
    page_path: str,
    page_title: str = "",
    referrer: str = "",
    user_agent: str = "",
    language: str = "",
    country: str = "",
    event_type: str = "",
    metadata: dict | None = None,
) -> AnalyticsEvent | None:
    """Record an event for a session that consented to analytics.

    Returns None (and stores nothing) without consent.
    """
    if not has_analytics_consent(session_id):
        logger.debug("Not tracking, no analytics consent", extra={"session_id": session_id})
        return None

    return AnalyticsEvent.objects.create(
        session_id=_clip(session_id, 128),
        page_path=_clip(page_path, 500),
        page_title=_clip(page_title, 255),
        referrer=_clip(referrer, 1000),
        user_agent=_clip(user_agent, 500),
        language=_clip(language, 16),
        country=_clip(country, 64),
        event_type=_clip(event_type, 64) or PAGEVIEW,
        metadata=metadata if isinstance(metadata, dict) else {},
    )


def _window(start: datetime | None, end: datetime | None, *, default_days: int) -> tuple[datetime, datetime]:
    end = end or timezone.now()
    start = start or (end - timedelta(days=default_days))
    return start, end


def get_stats(start: datetime | None = None, end: datetime | None = None) -> dict:
    """Page-view statistics for the window (default: the last 30 days)."""
    start, end = _window(start, end, default_days=30)
    views = AnalyticsEvent.objects.filter(created_at__gte=start, created_at__lte=end, event_type=PAGEVIEW)

    by_page = list(
        views.values("page_path").annotate(views=Count("id")).order_by("-views", "page_path")
    )
    by_day = list(
        views.annotate(day=TruncDate("created_at")).values("day").annotate(views=Count("id")).order_by("-day")[:30]
    )
    recent = views.order_by("-created_at").values("id", "page_path", "page_title", "created_at")[:20]

    pages = [{"path": r["page_path"], "views": r["views"]} for r in by_page]
    return {
        "total_page_views": views.count(),
        "unique_visitors": views.values("session_id").distinct().count(),
        "popular_pages": pages[:10],
        "recent_events": [
            {
                "id": str(r["id"]),
                "page_path": r["page_path"],
                "page_title": r["page_title"],
                "created_at": r["created_at"],
            }
            for r in recent
        ],
        "views_by_day": [{"date": r["day"].isoformat(), "views": r["views"]} for r in by_day],
        "views_by_page": pages,
    }


def export_events(start: datetime | None = None, end: datetime | None = None) -> list[dict]:
    """All events in the window (default: the last year), newest first."""
    start, end = _window(start, end, default_days=365)
    qs = AnalyticsEvent.objects.filter(created_at__gte=start, created_at__lte=end).order_by("-created_at")
    return [
        {
            "id": str(e.id),
            "session_id": e.session_id,
            "page_path": e.page_path,
            "page_title": e.page_title,
            "referrer": e.referrer,
            "user_agent": e.user_agent,
            "language": e.language,
            "country": e.country,
            "event_type": e.event_type,
            "metadata": e.metadata,
            "created_at": e.created_at,
        }
        for e in qs
    ]


def delete_events(start: datetime | None = None, end: datetime | None = None) -> int:
    """Delete events in the window (default: all time up to now)."""
    end = end or timezone.now()
    qs = AnalyticsEvent.objects.filter(created_at__lte=end)
    if start is not None:
        qs = qs.filter(created_at__gte=start)
    deleted, _ = qs.delete()
    return deleted


def delete_events_older_than(days: int) -> int:
    cutoff = timezone.now() - timedelta(days=int(days))
    deleted, _ = AnalyticsEvent.objects.filter(created_at__lt=cutoff).delete()
    logger.info("Purged %s analytics events older than %s days", deleted, days)
    return deleted
