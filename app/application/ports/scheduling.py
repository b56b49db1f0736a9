from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from app.domain.entities.time_slot import TimeSlot


class SchedulingPort(ABC):
    @abstractmethod
    async def fetch_slots(self, calendar_id: str, start: datetime, end: datetime) -> list[TimeSlot]:
        """Open slots in [start, end). Raises AvailabilityUnavailableError on failure."""
        raise NotImplementedError

    @abstractmethod
    async def submit_booking(self, payload: dict[str, Any]) -> None:
        """Send a booking confirmation. Raises BookingRejectedError on failure."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release network resources. Adapters without any keep the default."""
        return None
