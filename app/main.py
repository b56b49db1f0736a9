import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.widget import router as widget_router
from app.core.config import settings
from app.wiring.dependencies import shutdown_scheduling

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("session_id", "calendar_id", "selected_date", "start", "end", "status", "slot_count", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await shutdown_scheduling()


app = FastAPI(title="Appointment Booking Widget", version="1.0.0", lifespan=lifespan)

app.include_router(widget_router, prefix="/api/v1/widget", tags=["widget"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
