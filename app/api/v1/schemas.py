from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class SelectDateRequestSchema(BaseModel):
    date: date


class SelectSlotRequestSchema(BaseModel):
    start: str = Field(min_length=1)


class WidgetResponseSchema(BaseModel):
    session_id: str
    view: dict[str, Any]
