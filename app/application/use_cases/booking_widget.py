from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from app.application.exceptions import (
    AvailabilityUnavailableError,
    BookingRejectedError,
    WidgetActionError,
)
from app.application.ports.scheduling import SchedulingPort
from app.application.ports.widget_store import WidgetStorePort
from app.application.use_cases.extract_context import extract_booking_context
from app.application.utils.time_window import availability_window, default_selected_date, today_in
from app.domain.entities.booking_context import BookingContext
from app.domain.entities.time_slot import TimeSlot
from app.domain.entities.widget_state import WidgetState, WidgetStatus

AVAILABILITY_ERROR_MESSAGE = "Unable to load available times. Please try again."


def booking_error_message(support_phone: str) -> str:
    return f"Unable to complete booking. Please try again or call {support_phone}."


def build_booking_payload(context: BookingContext, slot: TimeSlot) -> dict[str, Any]:
    """JSON body for the booking service. Slot instants are passed through untouched."""
    return {
        "email": context.email,
        "repName": context.rep,
        "calendarId": context.calendar_id,
        "slotStart": slot.start,
        "slotEnd": slot.end,
        "location": context.location,
        "phone": context.phone,
        "projectType": context.project_type,
        "scheduledBy": context.scheduled_by,
    }


class BookingWidgetUseCase:
    """
    Drives one widget session per page view.

    Every action reads the session's latest state from the store, so a
    response that comes back after the user moved on can be detected and
    dropped instead of overwriting newer data.
    """

    def __init__(
        self,
        scheduling: SchedulingPort,
        store: WidgetStorePort,
        timezone: ZoneInfo,
        window_days: int = 14,
        support_phone: str = "(908) 290-5611",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._scheduling = scheduling
        self._store = store
        self._timezone = timezone
        self._window_days = window_days
        self._support_phone = support_phone
        self._clock = clock or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def get_state(self, session_id: str) -> WidgetState:
        state = self._store.get_state(session_id)
        if state is None:
            raise KeyError(session_id)
        return state

    async def mount(self, params: Mapping[str, str | None]) -> tuple[str, WidgetState]:
        context = extract_booking_context(params)
        if context is None:
            session_id = self._store.create(WidgetState(status=WidgetStatus.invalid_link))
            self._logger.info("Invalid booking link", extra={"session_id": session_id, "reason": "missing_params"})
            return session_id, self.get_state(session_id)

        selected = default_selected_date(self._timezone, self._clock())
        session_id = self._store.create(WidgetState(context=context, selected_date=selected))
        self._logger.info(
            "Widget mounted",
            extra={"session_id": session_id, "calendar_id": context.calendar_id, "selected_date": selected.isoformat()},
        )
        return session_id, await self._load_availability(session_id, selected)

    async def select_date(self, session_id: str, selected: date) -> WidgetState:
        state = self.get_state(session_id)
        if state.is_terminal or state.context is None:
            raise WidgetActionError(f"cannot change date while {state.status.value}")
        if state.status == WidgetStatus.submitting:
            raise WidgetActionError("cannot change date while a booking is being submitted")
        if selected < today_in(self._timezone, self._clock()):
            raise ValueError("date must not be in the past")
        return await self._load_availability(session_id, selected)

    def select_slot(self, session_id: str, start: str) -> WidgetState:
        state = self.get_state(session_id)
        if state.status not in {WidgetStatus.showing_slots, WidgetStatus.slot_selected}:
            raise WidgetActionError(f"cannot select a slot while {state.status.value}")
        slot = next((s for s in state.slots if s.start == start), None)
        if slot is None:
            raise ValueError("unknown slot")
        updated = replace(state, status=WidgetStatus.slot_selected, selected_slot=slot)
        self._store.set_state(session_id, updated)
        return updated

    async def submit(self, session_id: str) -> WidgetState:
        state = self.get_state(session_id)
        if state.status != WidgetStatus.slot_selected or state.selected_slot is None or state.context is None:
            raise WidgetActionError(f"cannot confirm while {state.status.value}")

        slot = state.selected_slot
        submitting = replace(state, status=WidgetStatus.submitting, error=None)
        self._store.set_state(session_id, submitting)
        try:
            await self._scheduling.submit_booking(build_booking_payload(state.context, slot))
        except BookingRejectedError as e:
            self._logger.warning("Booking failed", extra={"session_id": session_id, "error": str(e)})
            return self._booking_failed(session_id, submitting, slot)
        except Exception as e:
            self._logger.exception("Unexpected booking error", extra={"session_id": session_id, "error": str(e)})
            return self._booking_failed(session_id, submitting, slot)

        confirmed = replace(
            self._current(session_id, submitting),
            status=WidgetStatus.confirmed,
            confirmed_display=slot.display,
            error=None,
        )
        self._store.set_state(session_id, confirmed)
        self._logger.info(
            "Appointment confirmed",
            extra={"session_id": session_id, "calendar_id": state.context.calendar_id},
        )
        return confirmed

    def _current(self, session_id: str, fallback: WidgetState) -> WidgetState:
        """Latest stored state; the pre-await snapshot if the session was evicted meanwhile."""
        state = self._store.get_state(session_id)
        return fallback if state is None else state

    def _booking_failed(self, session_id: str, fallback: WidgetState, slot: TimeSlot) -> WidgetState:
        failed = replace(
            self._current(session_id, fallback),
            status=WidgetStatus.slot_selected,
            selected_slot=slot,
            error=booking_error_message(self._support_phone),
        )
        self._store.set_state(session_id, failed)
        return failed

    async def _load_availability(self, session_id: str, selected: date) -> WidgetState:
        state = self.get_state(session_id)
        if state.context is None:
            raise WidgetActionError("no booking context")
        calendar_id = state.context.calendar_id

        loading = replace(
            state,
            status=WidgetStatus.loading_availability,
            selected_date=selected,
            slots=(),
            selected_slot=None,
            error=None,
            fetch_token=selected,
        )
        self._store.set_state(session_id, loading)

        start, end = availability_window(selected, self._timezone, self._window_days)
        try:
            slots = await self._scheduling.fetch_slots(calendar_id, start, end)
            outcome: dict[str, Any] = {"status": WidgetStatus.showing_slots, "slots": tuple(slots), "error": None}
        except AvailabilityUnavailableError as e:
            self._logger.warning("Availability failed", extra={"session_id": session_id, "error": str(e)})
            outcome = {"status": WidgetStatus.errored, "slots": (), "error": AVAILABILITY_ERROR_MESSAGE}
        except Exception as e:
            self._logger.exception("Unexpected availability error", extra={"session_id": session_id, "error": str(e)})
            outcome = {"status": WidgetStatus.errored, "slots": (), "error": AVAILABILITY_ERROR_MESSAGE}

        current = self._current(session_id, loading)
        if current.fetch_token != selected or current.status != WidgetStatus.loading_availability:
            self._logger.info(
                "Discarding stale availability response",
                extra={"session_id": session_id, "selected_date": selected.isoformat()},
            )
            return current

        updated = replace(current, selected_slot=None, **outcome)
        self._store.set_state(session_id, updated)
        self._logger.info(
            "Availability loaded",
            extra={"session_id": session_id, "status": updated.status.value, "slot_count": len(updated.slots)},
        )
        return updated
