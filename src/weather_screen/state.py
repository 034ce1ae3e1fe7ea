from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from .domain.models import CURRENT_LOCATION_LABEL, WeatherSnapshot

LOGGER = logging.getLogger(__name__)


class FlowKind(str, Enum):
    CURRENT_DEVICE = "current_device"
    TEXT_SEARCH = "text_search"


class FlowPhase(str, Enum):
    IDLE = "idle"
    REQUESTING_PERMISSION = "requesting_permission"
    AWAITING_FIX = "awaiting_fix"
    REVERSE_GEOCODING = "reverse_geocoding"
    GEOCODING = "geocoding"
    FETCHING_WEATHER = "fetching_weather"
    READY = "ready"
    DENIED = "denied"
    FAILED = "failed"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AppState(BaseModel):
    model_config = ConfigDict(frozen=True)

    weather: WeatherSnapshot | None = None
    location_label: str = CURRENT_LOCATION_LABEL
    loading: bool = False
    search_text: str = ""
    recent_searches: tuple[str, ...] = ()
    clock: datetime = Field(default_factory=_utc_now)
    phase: FlowPhase = FlowPhase.IDLE
    flow: FlowKind | None = None
    alert: str | None = None


StateListener = Callable[[AppState], None]


class StateStore:
    """Holds the current ``AppState``; ``update`` is the only way to change it.

    Resolver flows on the event loop and the clock job on the scheduler thread
    both write through here.
    """

    def __init__(self, initial: AppState | None = None) -> None:
        self._state = initial or AppState()
        self._lock = threading.Lock()
        self._listeners: list[StateListener] = []

    def snapshot(self) -> AppState:
        with self._lock:
            return self._state

    def update(self, **changes: Any) -> AppState:
        with self._lock:
            self._state = self._state.model_copy(update=changes)
            state = self._state
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(state)
            except Exception:  # pragma: no cover
                LOGGER.exception("State listener failed")
        return state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
