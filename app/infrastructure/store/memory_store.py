from __future__ import annotations

import uuid

from app.application.ports.widget_store import WidgetStorePort
from app.domain.entities.widget_state import WidgetState


class MemoryWidgetStore(WidgetStorePort):
    def __init__(self, session_limit: int = 1000) -> None:
        self._states: dict[str, WidgetState] = {}
        self._session_limit = session_limit

    def create(self, state: WidgetState) -> str:
        session_id = uuid.uuid4().hex
        self._states[session_id] = state
        if len(self._states) > self._session_limit:
            # dicts keep insertion order: drop the oldest page views
            for stale_id in list(self._states)[: len(self._states) - self._session_limit]:
                del self._states[stale_id]
        return session_id

    def get_state(self, session_id: str) -> WidgetState | None:
        return self._states.get(session_id)

    def set_state(self, session_id: str, state: WidgetState) -> None:
        self._states[session_id] = state
