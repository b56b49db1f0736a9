from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TimeSlot:
    start: str  # ISO-8601 as received, never rewritten
    end: str
    display: str = ""

    def start_instant(self) -> datetime | None:
        """Parsed start instant, or None when the service sent something unparseable."""
        try:
            value = datetime.fromisoformat(self.start.replace("Z", "+00:00"))
        except (ValueError, AttributeError):
            return None
        if value.tzinfo is None:
            return None
        return value
