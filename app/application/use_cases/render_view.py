from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any
from zoneinfo import ZoneInfo

from app.application.utils.presentation import format_slot_time, group_slots_by_day, tel_href
from app.domain.entities.widget_state import WidgetState, WidgetStatus

INVALID_LINK_TITLE = "Invalid Booking Link"
INVALID_LINK_MESSAGE = "This booking link is missing required information. Please contact us directly."
CONFIRMED_TITLE = "Appointment Confirmed!"
NO_SLOTS_MESSAGE = "No available times found. Please select a different date."


@dataclass(frozen=True)
class ViewOptions:
    business_name: str
    support_phone: str
    display_timezone: ZoneInfo
    min_date: date


def render_view(state: WidgetState, options: ViewOptions) -> dict[str, Any]:
    """Render-ready model of the widget for its current state."""
    phone = {"label": options.support_phone, "href": tel_href(options.support_phone)}

    if state.status == WidgetStatus.invalid_link or state.context is None:
        return {
            "kind": "invalid_link",
            "status": state.status.value,
            "title": INVALID_LINK_TITLE,
            "message": INVALID_LINK_MESSAGE,
            "call_to_action": {"label": f"Call {options.support_phone}", "href": phone["href"]},
        }

    context = state.context
    if state.status == WidgetStatus.confirmed:
        return {
            "kind": "confirmed",
            "status": state.status.value,
            "title": CONFIRMED_TITLE,
            "rep": context.rep,
            "confirmed_time": state.confirmed_display,
            "location": context.location,
            "phone": context.phone,
            "reschedule_note": f"If you need to reschedule, please call us at {options.support_phone}.",
        }

    loading_slots = state.status == WidgetStatus.loading_availability
    submitting = state.status == WidgetStatus.submitting
    selected_start = state.selected_slot.start if state.selected_slot else None

    groups: list[dict[str, Any]] = []
    if not loading_slots:
        for label, slots in group_slots_by_day(state.slots, options.display_timezone).items():
            groups.append(
                {
                    "date": label,
                    "slots": [
                        {
                            "start": slot.start,
                            "end": slot.end,
                            "display": slot.display,
                            "time": format_slot_time(slot, options.display_timezone),
                            "selected": slot.start == selected_start,
                        }
                        for slot in slots
                    ],
                }
            )

    show_error = not loading_slots and state.error is not None
    no_slots = not loading_slots and not submitting and state.error is None and not state.slots

    return {
        "kind": "booking",
        "status": state.status.value,
        "business_name": options.business_name,
        "subtitle": "Schedule Your Appointment",
        "rep": context.rep,
        "project_type": context.project_type,
        "location": context.location,
        "selected_date": state.selected_date.isoformat() if state.selected_date else None,
        "min_date": options.min_date.isoformat(),
        "loading": state.loading,
        "error": state.error if show_error else None,
        "no_slots_message": NO_SLOTS_MESSAGE if no_slots else None,
        "groups": groups,
        "selected_slot": state.selected_slot.display if state.selected_slot else None,
        "can_confirm": state.status == WidgetStatus.slot_selected,
        "confirm_label": "Booking..." if submitting else "Confirm Appointment",
        "footer": {"text": f"Questions? Call us at {options.support_phone}", "phone": phone},
    }
