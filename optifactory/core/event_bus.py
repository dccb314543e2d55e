"""Publish-subscribe event bus for registry and library notifications."""
from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Callable, Optional

logger = logging.getLogger(__name__)

EventHandler = Callable[[dict], None]

SOLVER_REGISTERED = "solver.registered"
SOLVER_UNREGISTERED = "solver.unregistered"
SOLVER_REJECTED = "solver.rejected"
SOLVER_CONSTRUCTED = "solver.constructed"
SOLVER_NOT_FOUND = "solver.not_found"
LIBRARY_ACTIVATED = "library.activated"
LIBRARY_DEACTIVATED = "library.deactivated"
WILDCARD = "*"


class EventBus:
    def __init__(self, keep_history: bool = False, max_history: Optional[int] = None):
        self._subscribers: dict[str, list[EventHandler]] = {}
        self._keep_history = keep_history
        self._history: deque = deque(maxlen=max_history)

    def subscribe(self, event: str, handler: EventHandler) -> None:
        self._subscribers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: str, handler: EventHandler) -> None:
        handlers = self._subscribers.get(event)
        if handlers is None:
            return
        self._subscribers[event] = [h for h in handlers if h is not handler]

    def emit(self, event: str, data: Optional[dict] = None) -> None:
        payload = dict(data or {})
        if self._keep_history:
            self._history.append({
                "event": event,
                "data": payload,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            })

        handlers = list(self._subscribers.get(event, []))
        if event != WILDCARD:
            handlers.extend(self._subscribers.get(WILDCARD, []))

        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception("Event handler error for %s", event)

    def get_history(self, event: Optional[str] = None) -> list:
        if event is None:
            return list(self._history)
        return [rec for rec in self._history if rec["event"] == event]

    def clear_history(self) -> None:
        self._history.clear()
