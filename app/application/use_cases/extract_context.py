from __future__ import annotations

from collections.abc import Mapping

from app.domain.entities.booking_context import BookingContext

REQUIRED_PARAMS = ("email", "rep", "calendarId")


def _param(params: Mapping[str, str | None], name: str) -> str:
    value = params.get(name)
    if value is None:
        return ""
    return str(value)


def extract_booking_context(params: Mapping[str, str | None]) -> BookingContext | None:
    """
    Build the booking context from the link's query parameters.
    Returns None when email, rep or calendarId is missing or blank.
    """
    if not all(_param(params, name).strip() for name in REQUIRED_PARAMS):
        return None
    return BookingContext(
        email=_param(params, "email"),
        rep=_param(params, "rep"),
        calendar_id=_param(params, "calendarId"),
        location=_param(params, "location"),
        phone=_param(params, "phone"),
        project_type=_param(params, "projectType"),
        scheduled_by=_param(params, "scheduledBy"),
        zip=_param(params, "zip"),
    )
