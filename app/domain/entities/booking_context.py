from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingContext:
    email: str
    rep: str
    calendar_id: str
    location: str = ""
    phone: str = ""
    project_type: str = ""
    scheduled_by: str = ""
    zip: str = ""
