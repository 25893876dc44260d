from __future__ import annotations

from datetime import datetime
from typing import Any

from ninja import Schema

from api.schemas import CamelSchema


class ConsentIn(CamelSchema):
    session_id: str = ""
    analytics: bool = False
    marketing: bool = False


class ConsentOut(CamelSchema):
    session_id: str
    necessary: bool
    analytics: bool
    marketing: bool


class TrackIn(CamelSchema):
    session_id: str | None = None
    page_path: str | None = None
    page_title: str | None = None
    referrer: str | None = None
    user_agent: str | None = None
    language: str | None = None
    country: str | None = None
    event_type: str | None = None
    metadata: dict[str, Any] | None = None


class TrackOut(Schema):
    success: bool = True


class PageViewsOut(Schema):
    path: str
    views: int


class DayViewsOut(Schema):
    date: str
    views: int


class RecentEventOut(CamelSchema):
    id: str
    page_path: str
    page_title: str = ""
    created_at: datetime


class StatsOut(CamelSchema):
    total_page_views: int
    unique_visitors: int
    popular_pages: list[PageViewsOut]
    recent_events: list[RecentEventOut]
    views_by_day: list[DayViewsOut]
    views_by_page: list[PageViewsOut]


class EventExportOut(CamelSchema):
    id: str
    session_id: str
    page_path: str
    page_title: str = ""
    referrer: str = ""
    user_agent: str = ""
    language: str = ""
    country: str = ""
    event_type: str
    metadata: dict = {}
    created_at: datetime


class DeletedOut(Schema):
    deleted: int
