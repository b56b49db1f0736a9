from __future__ import annotations

from dataclasses import replace
from datetime import date

from app.application.use_cases.extract_context import extract_booking_context
from app.application.use_cases.render_view import NO_SLOTS_MESSAGE, ViewOptions, render_view
from app.domain.entities.widget_state import WidgetState, WidgetStatus
from tests.fakes import TOMORROW, TZ, VALID_PARAMS, make_slots

OPTIONS = ViewOptions(
    business_name="Garden State Brickface & Siding",
    support_phone="(908) 290-5611",
    display_timezone=TZ,
    min_date=date(2026, 10, 17),
)
CONTEXT = extract_booking_context(VALID_PARAMS)


def _showing(**changes) -> WidgetState:
    state = WidgetState(
        status=WidgetStatus.showing_slots,
        context=CONTEXT,
        selected_date=TOMORROW,
        slots=tuple(make_slots()),
    )
    return replace(state, **changes)


def test_invalid_link_view_offers_phone():
    view = render_view(WidgetState(status=WidgetStatus.invalid_link), OPTIONS)

    assert view["kind"] == "invalid_link"
    assert view["title"] == "Invalid Booking Link"
    assert view["call_to_action"] == {"label": "Call (908) 290-5611", "href": "tel:9082905611"}


def test_three_days_render_three_groups():
    view = render_view(_showing(), OPTIONS)

    assert [g["date"] for g in view["groups"]] == [
        "Monday, October 19",
        "Tuesday, October 20",
        "Wednesday, October 21",
    ]
    assert [s["time"] for s in view["groups"][0]["slots"]] == ["9:00 AM", "11:00 AM"]
    assert view["no_slots_message"] is None
    assert view["can_confirm"] is False


def test_loading_view_hides_slots_and_error():
    view = render_view(_showing(status=WidgetStatus.loading_availability, error="stale"), OPTIONS)

    assert view["loading"] is True
    assert view["groups"] == []
    assert view["error"] is None
    assert view["no_slots_message"] is None


def test_empty_slots_show_informational_message():
    view = render_view(_showing(slots=()), OPTIONS)
    assert view["no_slots_message"] == NO_SLOTS_MESSAGE
    assert view["error"] is None


def test_selected_slot_is_flagged_and_confirmable():
    slot = make_slots()[1]
    view = render_view(_showing(status=WidgetStatus.slot_selected, selected_slot=slot), OPTIONS)

    flags = [s["selected"] for s in view["groups"][0]["slots"]]
    assert flags == [False, True]
    assert view["selected_slot"] == slot.display
    assert view["can_confirm"] is True
    assert view["confirm_label"] == "Confirm Appointment"


def test_submitting_view_labels_button():
    slot = make_slots()[0]
    view = render_view(_showing(status=WidgetStatus.submitting, selected_slot=slot), OPTIONS)
    assert view["confirm_label"] == "Booking..."
    assert view["can_confirm"] is False


def test_confirmed_view_shows_exact_display():
    view = render_view(
        _showing(status=WidgetStatus.confirmed, confirmed_display="Tuesday, October 20 at 9:00 AM"),
        OPTIONS,
    )

    assert view["kind"] == "confirmed"
    assert view["confirmed_time"] == "Tuesday, October 20 at 9:00 AM"
    assert view["rep"] == "Tom Rivera"
    assert view["location"] == "12 Elm St, Cranford NJ"
