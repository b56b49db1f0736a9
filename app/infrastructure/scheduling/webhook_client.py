from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from app.application.exceptions import AvailabilityUnavailableError, BookingRejectedError
from app.application.ports.scheduling import SchedulingPort
from app.application.utils.time_window import to_wire_instant
from app.core.config import settings
from app.domain.entities.time_slot import TimeSlot


class WebhookScheduling(SchedulingPort):
    """Scheduling service reached through two plain HTTP webhooks."""

    def __init__(
        self,
        availability_url: str | None = None,
        booking_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._availability_url = availability_url or settings.AVAILABILITY_URL
        self._booking_url = booking_url or settings.BOOKING_URL
        if not self._availability_url or not self._booking_url:
            raise ValueError("AVAILABILITY_URL and BOOKING_URL are required for webhook scheduling")

        self._client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    async def fetch_slots(self, calendar_id: str, start: datetime, end: datetime) -> list[TimeSlot]:
        params = {
            "calendarId": calendar_id,
            "startDate": to_wire_instant(start),
            "endDate": to_wire_instant(end),
        }
        self._logger.info(
            "Fetching availability",
            extra={"calendar_id": calendar_id, "start": params["startDate"], "end": params["endDate"]},
        )
        try:
            response = await self._client.get(self._availability_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._logger.error(
                "Availability request rejected",
                extra={"calendar_id": calendar_id, "status": e.response.status_code},
            )
            raise AvailabilityUnavailableError(f"availability returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            self._logger.error("Availability request failed", extra={"calendar_id": calendar_id, "error": str(e)})
            raise AvailabilityUnavailableError(str(e)) from e

        try:
            data = response.json()
        except ValueError:
            self._logger.warning("Availability body is not JSON", extra={"calendar_id": calendar_id})
            return []

        slots = parse_slots(data)
        self._logger.info("Availability received", extra={"calendar_id": calendar_id, "slot_count": len(slots)})
        return slots

    async def submit_booking(self, payload: dict[str, Any]) -> None:
        try:
            response = await self._client.post(
                self._booking_url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._logger.error(
                "Booking request rejected",
                extra={"calendar_id": payload.get("calendarId"), "status": e.response.status_code},
            )
            raise BookingRejectedError(f"booking returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            self._logger.error(
                "Booking request failed",
                extra={"calendar_id": payload.get("calendarId"), "error": str(e)},
            )
            raise BookingRejectedError(str(e)) from e

        self._logger.info("Booking accepted", extra={"calendar_id": payload.get("calendarId")})

    async def aclose(self) -> None:
        await self._client.aclose()


def parse_slots(data: Any) -> list[TimeSlot]:
    """Read the `slots` array of an availability body; anything malformed counts as no slots."""
    if not isinstance(data, dict):
        return []
    raw_slots = data.get("slots")
    if not isinstance(raw_slots, list):
        return []

    slots: list[TimeSlot] = []
    for item in raw_slots:
        if not isinstance(item, dict):
            continue
        start = item.get("start")
        end = item.get("end")
        if not isinstance(start, str) or not isinstance(end, str):
            continue
        display = item.get("display")
        slots.append(TimeSlot(start=start, end=end, display=display if isinstance(display, str) else ""))
    return slots
