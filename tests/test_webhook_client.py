from __future__ import annotations

import json
from datetime import datetime
from zoneinfo import ZoneInfo

import httpx
import pytest

from app.application.exceptions import AvailabilityUnavailableError, BookingRejectedError
from app.core.config import settings
from app.infrastructure.scheduling.webhook_client import WebhookScheduling, parse_slots
from app.wiring.dependencies import get_scheduling, shutdown_scheduling
from tests.fakes import run

NY = ZoneInfo("America/New_York")
AVAILABILITY_URL = "https://hooks.example.test/availability"
BOOKING_URL = "https://hooks.example.test/book-appointment"


def _scheduling(handler) -> WebhookScheduling:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WebhookScheduling(availability_url=AVAILABILITY_URL, booking_url=BOOKING_URL, client=client)


def test_fetch_sends_calendar_and_window_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"slots": [{"start": "S", "end": "E", "display": "D"}]})

    slots = run(
        _scheduling(handler).fetch_slots(
            "cal-1",
            datetime(2026, 10, 18, tzinfo=NY),
            datetime(2026, 11, 1, tzinfo=NY),
        )
    )

    assert [(s.start, s.end, s.display) for s in slots] == [("S", "E", "D")]
    request = seen[0]
    assert request.method == "GET"
    assert str(request.url).startswith(AVAILABILITY_URL)
    assert request.url.params["calendarId"] == "cal-1"
    assert request.url.params["startDate"] == "2026-10-18T04:00:00.000Z"
    assert request.url.params["endDate"] == "2026-11-01T04:00:00.000Z"


@pytest.mark.parametrize("status", [400, 404, 500, 503])
def test_fetch_non_success_raises(status):
    scheduling = _scheduling(lambda request: httpx.Response(status, json={"slots": []}))
    with pytest.raises(AvailabilityUnavailableError):
        run(scheduling.fetch_slots("cal-1", datetime(2026, 10, 18, tzinfo=NY), datetime(2026, 11, 1, tzinfo=NY)))


def test_fetch_network_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(AvailabilityUnavailableError):
        run(_scheduling(handler).fetch_slots("c", datetime(2026, 10, 18, tzinfo=NY), datetime(2026, 11, 1, tzinfo=NY)))


def test_fetch_non_json_body_is_empty():
    scheduling = _scheduling(lambda request: httpx.Response(200, text="<html>ok</html>"))
    assert run(scheduling.fetch_slots("c", datetime(2026, 10, 18, tzinfo=NY), datetime(2026, 11, 1, tzinfo=NY))) == []


@pytest.mark.parametrize(
    "body",
    [{}, {"slots": None}, {"slots": "nope"}, {"slots": {"start": "S"}}, [], "text"],
)
def test_parse_slots_malformed_is_empty(body):
    assert parse_slots(body) == []


def test_parse_slots_skips_bad_items_and_defaults_display():
    slots = parse_slots({"slots": [{"start": "S1", "end": "E1"}, {"start": 5, "end": "E2"}, "junk"]})
    assert len(slots) == 1
    assert slots[0].display == ""


def test_submit_posts_json_payload():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    payload = {"email": "a@b.c", "slotStart": "2026-10-19T13:00:00.000Z"}
    run(_scheduling(handler).submit_booking(payload))

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == BOOKING_URL
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == payload


def test_submit_non_success_raises():
    scheduling = _scheduling(lambda request: httpx.Response(409, text="taken"))
    with pytest.raises(BookingRejectedError):
        run(scheduling.submit_booking({"calendarId": "c"}))


def test_missing_urls_fail_before_opening_a_client(monkeypatch):
    created: list[object] = []

    class TrackingClient(httpx.AsyncClient):
        def __init__(self, *args, **kwargs):
            created.append(self)
            super().__init__(*args, **kwargs)

    monkeypatch.setattr(settings, "AVAILABILITY_URL", "")
    monkeypatch.setattr(httpx, "AsyncClient", TrackingClient)

    with pytest.raises(ValueError):
        WebhookScheduling(booking_url=BOOKING_URL)
    assert created == []


def test_shutdown_closes_webhook_client(monkeypatch):
    monkeypatch.setattr(settings, "SCHEDULING_PROVIDER", "webhook")
    get_scheduling.cache_clear()
    try:
        scheduling = get_scheduling()
        assert isinstance(scheduling, WebhookScheduling)

        run(shutdown_scheduling())

        assert scheduling._client.is_closed
        assert get_scheduling.cache_info().currsize == 0
    finally:
        get_scheduling.cache_clear()
