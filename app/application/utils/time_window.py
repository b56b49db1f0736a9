from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone
from zoneinfo import ZoneInfo


def today_in(timezone: ZoneInfo, now: datetime | None = None) -> date:
    """Calendar date of `now` (default: current time) in the given time zone."""
    if now is None:
        return datetime.now(timezone).date()
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(timezone).date()


def default_selected_date(timezone: ZoneInfo, now: datetime | None = None) -> date:
    return today_in(timezone, now) + timedelta(days=1)


def availability_window(selected_date: date, timezone: ZoneInfo, days: int = 14) -> tuple[datetime, datetime]:
    """Half-open window [local midnight of selected_date, + days)."""
    start = datetime.combine(selected_date, datetime.min.time(), tzinfo=timezone)
    end = datetime.combine(selected_date + timedelta(days=days), datetime.min.time(), tzinfo=timezone)
    return start, end


def to_wire_instant(value: datetime) -> str:
    """UTC instant with millisecond precision and a Z suffix, e.g. 2026-10-18T04:00:00.000Z."""
    if value.tzinfo is None:
        raise ValueError("instant must be timezone-aware")
    utc = value.astimezone(dt_timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except Exception:
        return ZoneInfo("UTC")
