from __future__ import annotations

import pytest

from app.application.use_cases.booking_widget import BookingWidgetUseCase
from app.infrastructure.store.memory_store import MemoryWidgetStore
from tests.fakes import NOW, TZ, FakeScheduling, make_slots


@pytest.fixture
def scheduling() -> FakeScheduling:
    return FakeScheduling(make_slots())


@pytest.fixture
def store() -> MemoryWidgetStore:
    return MemoryWidgetStore()


@pytest.fixture
def use_case(scheduling: FakeScheduling, store: MemoryWidgetStore) -> BookingWidgetUseCase:
    return BookingWidgetUseCase(
        scheduling=scheduling,
        store=store,
        timezone=TZ,
        window_days=14,
        support_phone="(908) 290-5611",
        clock=lambda: NOW,
    )
