from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any
from zoneinfo import ZoneInfo

from app.application.exceptions import BookingRejectedError
from app.application.ports.scheduling import SchedulingPort
from app.application.utils.presentation import format_day_label, format_time_label
from app.application.utils.time_window import to_wire_instant
from app.domain.entities.time_slot import TimeSlot


class MockScheduling(SchedulingPort):
    def __init__(
        self,
        timezone: ZoneInfo | None = None,
        start_hour: int = 9,
        end_hour: int = 17,
        slot_minutes: int = 120,
    ) -> None:
        self._timezone = timezone or ZoneInfo("America/New_York")
        self._start_hour = start_hour
        self._end_hour = end_hour
        self._slot_minutes = slot_minutes
        self._bookings: dict[tuple[str, str], dict[str, Any]] = {}
        self._logger = logging.getLogger(__name__)

    async def fetch_slots(self, calendar_id: str, start: datetime, end: datetime) -> list[TimeSlot]:
        slots: list[TimeSlot] = []
        day = start.astimezone(self._timezone).date()
        last_day = end.astimezone(self._timezone).date()
        while day < last_day:
            if day.weekday() < 5:
                current = datetime.combine(day, datetime.min.time().replace(hour=self._start_hour), tzinfo=self._timezone)
                day_end = current.replace(hour=self._end_hour)
                while current + timedelta(minutes=self._slot_minutes) <= day_end:
                    slot_start = to_wire_instant(current)
                    if (calendar_id, slot_start) not in self._bookings:
                        slots.append(
                            TimeSlot(
                                start=slot_start,
                                end=to_wire_instant(current + timedelta(minutes=self._slot_minutes)),
                                display=f"{format_day_label(current)} at {format_time_label(current)}",
                            )
                        )
                    current += timedelta(minutes=self._slot_minutes)
            day += timedelta(days=1)
        self._logger.info("Mock availability generated", extra={"calendar_id": calendar_id, "slot_count": len(slots)})
        return slots

    async def submit_booking(self, payload: dict[str, Any]) -> None:
        key = (str(payload.get("calendarId")), str(payload.get("slotStart")))
        if key in self._bookings:
            raise BookingRejectedError("slot already booked")
        self._bookings[key] = dict(payload)
        self._logger.info("Mock booking created", extra={"calendar_id": key[0], "start": key[1]})

    @property
    def bookings(self) -> list[dict[str, Any]]:
        return list(self._bookings.values())
