from __future__ import annotations

import logging
from datetime import datetime

from django.db import DatabaseError
from ninja import Router
from ninja.errors import HttpError

from accounts.auth import require_admin

from .schemas import ConsentIn, ConsentOut, DeletedOut, EventExportOut, StatsOut, TrackIn, TrackOut
from .services import delete_events, export_events, get_stats, save_consent, track_event

logger = logging.getLogger(__name__)

router = Router(tags=["analytics"])
admin_router = Router(tags=["admin-analytics"])


def _check_range(start: datetime | None, end: datetime | None) -> None:
    if start is not None and end is not None and start > end:
        raise HttpError(400, "Start date must be before end date")


@router.post("/consent", response=ConsentOut, by_alias=True)
def consent(request, payload: ConsentIn):
    if not (payload.session_id or "").strip():
        raise HttpError(400, "Session ID is required")
    c = save_consent(session_id=payload.session_id, analytics=payload.analytics, marketing=payload.marketing)
    return {"session_id": c.session_id, "necessary": c.necessary, "analytics": c.analytics, "marketing": c.marketing}


@router.post("/track", response=TrackOut)
def track(request, payload: TrackIn):
    session_id = (payload.session_id or "").strip()
    page_path = (payload.page_path or "").strip()
    if not session_id or not page_path:
        raise HttpError(400, "Session ID and page path are required")

    try:
        track_event(
            session_id=session_id,
            page_path=page_path,
            page_title=payload.page_title or "",
            referrer=payload.referrer or request.headers.get("Referer", ""),
            user_agent=payload.user_agent or request.headers.get("User-Agent", ""),
            language=payload.language or "",
            country=payload.country or "",
            event_type=payload.event_type or "",
            metadata=payload.metadata,
        )
    except DatabaseError:
        # Tracking must never break the page that reported it.
        logger.exception("Tracking analytics event failed", extra={"page_path": page_path})
    return {"success": True}


@admin_router.get("/stats", response=StatsOut, by_alias=True)
def stats(request, start: datetime | None = None, end: datetime | None = None):
    require_admin(request)
    _check_range(start, end)
    return get_stats(start, end)


@admin_router.get("/export", response=list[EventExportOut], by_alias=True)
def export(request, start: datetime | None = None, end: datetime | None = None):
    require_admin(request)
    _check_range(start, end)
    return export_events(start, end)


@admin_router.delete("/events", response=DeletedOut)
def delete(request, start: datetime | None = None, end: datetime | None = None):
    require_admin(request)
    _check_range(start, end)
    return {"deleted": delete_events(start, end)}
