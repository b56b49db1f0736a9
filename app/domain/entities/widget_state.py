from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from app.domain.entities.booking_context import BookingContext
from app.domain.entities.time_slot import TimeSlot


class WidgetStatus(str, Enum):
    awaiting_context = "awaiting_context"
    loading_availability = "loading_availability"
    showing_slots = "showing_slots"
    slot_selected = "slot_selected"
    submitting = "submitting"
    confirmed = "confirmed"
    errored = "errored"
    invalid_link = "invalid_link"


TERMINAL_STATUSES = frozenset({WidgetStatus.confirmed, WidgetStatus.invalid_link})


@dataclass(frozen=True)
class WidgetState:
    status: WidgetStatus = WidgetStatus.awaiting_context
    context: BookingContext | None = None
    selected_date: date | None = None
    slots: tuple[TimeSlot, ...] = field(default_factory=tuple)
    selected_slot: TimeSlot | None = None
    error: str | None = None
    confirmed_display: str | None = None
    # date the most recent availability fetch was issued for
    fetch_token: date | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def loading(self) -> bool:
        return self.status in {WidgetStatus.loading_availability, WidgetStatus.submitting}
