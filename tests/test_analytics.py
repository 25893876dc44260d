from datetime import timedelta

import pytest
from django.core.management import call_command
from django.db import DatabaseError
from django.utils import timezone

from analytics.models import AnalyticsEvent, CookieConsent
from analytics.services import (
    delete_events_older_than,
    get_stats,
    save_consent,
    track_event,
)


def _event(session="s1", path="/", days_ago=0, **extra):
    e = AnalyticsEvent.objects.create(session_id=session, page_path=path, **extra)
    if days_ago:
        AnalyticsEvent.objects.filter(id=e.id).update(created_at=timezone.now() - timedelta(days=days_ago))
    return e


# =============================================================================
# Consent gating
# =============================================================================


@pytest.mark.django_db
class TestConsent:
    def test_no_consent_no_event(self):
        assert track_event(session_id="s1", page_path="/") is None
        assert not AnalyticsEvent.objects.exists()

    def test_declined_analytics(self):
        save_consent(session_id="s1", analytics=False, marketing=True)
        assert track_event(session_id="s1", page_path="/") is None

    def test_consented(self):
        save_consent(session_id="s1", analytics=True, marketing=False)
        event = track_event(session_id="s1", page_path="/projects", metadata={"ref": "nav"})
        assert event.event_type == "pageview"
        assert event.metadata == {"ref": "nav"}

    def test_consent_is_updated_in_place(self):
        save_consent(session_id="s1", analytics=True, marketing=False)
        save_consent(session_id="s1", analytics=False, marketing=False)
        assert CookieConsent.objects.count() == 1
        assert track_event(session_id="s1", page_path="/") is None


# =============================================================================
# Statistics
# =============================================================================


@pytest.mark.django_db
class TestStats:
    def test_totals(self):
        _event("a", "/")
        _event("a", "/projects")
        _event("b", "/projects")
        _event("b", "/contact", event_type="click")
        _event("c", "/old", days_ago=45)

        stats = get_stats()

        assert stats["total_page_views"] == 3
        assert stats["unique_visitors"] == 2
        assert stats["popular_pages"][0] == {"path": "/projects", "views": 2}
        assert len(stats["recent_events"]) == 3
        assert sum(d["views"] for d in stats["views_by_day"]) == 3

    def test_popular_pages_top_ten(self):
        for n in range(12):
            _event("a", f"/p{n}")
        stats = get_stats()
        assert len(stats["popular_pages"]) == 10
        assert len(stats["views_by_page"]) == 12

    def test_retention(self):
        _event(days_ago=400)
        _event(days_ago=10)
        assert delete_events_older_than(365) == 1
        assert AnalyticsEvent.objects.count() == 1

    def test_purge_command(self):
        _event(days_ago=400)
        call_command("purge_analytics", "--days", "365", "--dry-run")
        assert AnalyticsEvent.objects.count() == 1
        call_command("purge_analytics", "--days", "365")
        assert AnalyticsEvent.objects.count() == 0


# =============================================================================
# HTTP
# =============================================================================


@pytest.mark.django_db
class TestAnalyticsApi:
    def test_consent_requires_session(self, anon_client):
        res = anon_client.post("/api/analytics/consent", {"analytics": True}, content_type="application/json")
        assert res.status_code == 400
        assert res.json() == {"detail": "Session ID is required"}

    def test_consent_then_track(self, anon_client):
        res = anon_client.post(
            "/api/analytics/consent",
            {"sessionId": "s1", "analytics": True},
            content_type="application/json",
        )
        assert res.json() == {"sessionId": "s1", "necessary": True, "analytics": True, "marketing": False}

        res = anon_client.post(
            "/api/analytics/track",
            {"sessionId": "s1", "pagePath": "/projects", "pageTitle": "Projects"},
            content_type="application/json",
            HTTP_USER_AGENT="pytest-agent",
        )
        assert res.json() == {"success": True}
        event = AnalyticsEvent.objects.get()
        assert event.user_agent == "pytest-agent"
        assert event.page_title == "Projects"

    def test_track_without_consent_succeeds_silently(self, anon_client):
        res = anon_client.post(
            "/api/analytics/track", {"sessionId": "s9", "pagePath": "/"}, content_type="application/json"
        )
        assert res.status_code == 200
        assert not AnalyticsEvent.objects.exists()

    def test_track_requires_path(self, anon_client):
        res = anon_client.post("/api/analytics/track", {"sessionId": "s1"}, content_type="application/json")
        assert res.status_code == 400
        assert res.json() == {"detail": "Session ID and page path are required"}

    def test_track_survives_database_errors(self, anon_client, monkeypatch):
        def broken(**kwargs):
            raise DatabaseError("database is locked")

        monkeypatch.setattr("analytics.api.track_event", broken)
        res = anon_client.post(
            "/api/analytics/track", {"sessionId": "s1", "pagePath": "/"}, content_type="application/json"
        )
        assert res.json() == {"success": True}

    def test_stats_requires_staff(self, anon_client, user_client):
        assert anon_client.get("/api/admin/analytics/stats").status_code == 401
        assert user_client.get("/api/admin/analytics/stats").status_code == 403

    def test_stats(self, staff_client):
        _event("a", "/projects")
        body = staff_client.get("/api/admin/analytics/stats").json()
        assert body["totalPageViews"] == 1
        assert body["uniqueVisitors"] == 1
        assert body["popularPages"] == [{"path": "/projects", "views": 1}]
        assert body["recentEvents"][0]["pagePath"] == "/projects"

    def test_inverted_range(self, staff_client):
        res = staff_client.get(
            "/api/admin/analytics/stats?start=2026-02-01T00:00:00Z&end=2026-01-01T00:00:00Z"
        )
        assert res.status_code == 400

    def test_export_and_delete(self, staff_client):
        _event("a", "/one")
        _event("b", "/two", days_ago=500)

        exported = staff_client.get("/api/admin/analytics/export").json()
        assert [e["pagePath"] for e in exported] == ["/one"]

        assert staff_client.delete("/api/admin/analytics/events").json() == {"deleted": 2}
        assert not AnalyticsEvent.objects.exists()
