from abc import ABC, abstractmethod

from app.domain.entities.widget_state import WidgetState


class WidgetStorePort(ABC):
    @abstractmethod
    def create(self, state: WidgetState) -> str:
        """Store a new widget session. Returns session_id."""
        raise NotImplementedError

    @abstractmethod
    def get_state(self, session_id: str) -> WidgetState | None:
        raise NotImplementedError

    @abstractmethod
    def set_state(self, session_id: str, state: WidgetState) -> None:
        raise NotImplementedError
