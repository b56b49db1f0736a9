from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from app.domain.entities.time_slot import TimeSlot


def format_day_label(value: datetime) -> str:
    """en-US long weekday, month and day, e.g. 'Tuesday, October 20'."""
    return f"{value.strftime('%A')}, {value.strftime('%B')} {value.day}"


def format_time_label(value: datetime) -> str:
    """en-US hour and minute, e.g. '9:00 AM'."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def group_slots_by_day(slots: list[TimeSlot] | tuple[TimeSlot, ...], display_timezone: ZoneInfo) -> dict[str, list[TimeSlot]]:
    """
    Partition slots by the calendar day of their start instant in the display time zone.
    Groups keep first-seen order; slots keep arrival order within a group.
    Slots with an unparseable start are left out.
    """
    groups: dict[str, list[TimeSlot]] = {}
    for slot in slots:
        instant = slot.start_instant()
        if instant is None:
            continue
        key = format_day_label(instant.astimezone(display_timezone))
        groups.setdefault(key, []).append(slot)
    return groups


def format_slot_time(slot: TimeSlot, display_timezone: ZoneInfo) -> str:
    instant = slot.start_instant()
    if instant is None:
        return slot.display
    return format_time_label(instant.astimezone(display_timezone))


def tel_href(phone: str) -> str:
    digits = "".join(ch for ch in phone if ch.isdigit())
    return f"tel:{digits}"
