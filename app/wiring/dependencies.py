from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.scheduling import SchedulingPort
from app.application.ports.widget_store import WidgetStorePort
from app.application.use_cases.booking_widget import BookingWidgetUseCase
from app.application.use_cases.render_view import ViewOptions
from app.application.utils.time_window import safe_timezone, today_in
from app.infrastructure.scheduling.mock_scheduling import MockScheduling
from app.infrastructure.scheduling.webhook_client import WebhookScheduling
from app.infrastructure.store.memory_store import MemoryWidgetStore


@lru_cache
def get_scheduling() -> SchedulingPort:
    logger = logging.getLogger(__name__)
    provider = (settings.SCHEDULING_PROVIDER or "").lower()
    if provider == "mock" or (not provider and settings.ENV.lower() in {"dev", "local"}):
        logger.info("Using MockScheduling (provider=%s, ENV=%s)", provider or "auto", settings.ENV)
        return MockScheduling(timezone=safe_timezone(settings.CLIENT_TIMEZONE))
    logger.info("Using WebhookScheduling")
    return WebhookScheduling(
        availability_url=settings.AVAILABILITY_URL,
        booking_url=settings.BOOKING_URL,
    )


@lru_cache
def get_widget_store() -> WidgetStorePort:
    return MemoryWidgetStore()


def get_booking_widget_use_case() -> BookingWidgetUseCase:
    return BookingWidgetUseCase(
        scheduling=get_scheduling(),
        store=get_widget_store(),
        timezone=safe_timezone(settings.CLIENT_TIMEZONE),
        window_days=settings.AVAILABILITY_WINDOW_DAYS,
        support_phone=settings.SUPPORT_PHONE,
    )


def get_view_options() -> ViewOptions:
    return ViewOptions(
        business_name=settings.BUSINESS_NAME,
        support_phone=settings.SUPPORT_PHONE,
        display_timezone=safe_timezone(settings.DISPLAY_TIMEZONE),
        min_date=today_in(safe_timezone(settings.CLIENT_TIMEZONE)),
    )


async def shutdown_scheduling() -> None:
    if get_scheduling.cache_info().currsize == 0:
        return
    await get_scheduling().aclose()
    get_scheduling.cache_clear()
