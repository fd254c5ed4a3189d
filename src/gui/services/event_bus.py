"""EventBus for session lifecycle notifications.

Synchronous publish/subscribe with typed events so the window layer can react
to a restored or saved session without the store knowing about it.

 - One failing handler doesn't break the publish cycle (errors are collected)
 - One-shot (once) subscriptions
 - Unsubscribe handles
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol

__all__ = [
    "SessionEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_log = logging.getLogger(__name__)


class SessionEvent(str, Enum):
    SESSION_RESTORED = "session_restored"
    SESSION_RESTORE_FAILED = "session_restore_failed"
    SESSION_SAVED = "session_saved"
    UPDATE_APPLYING = "update_applying"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | SessionEvent) -> str:
    return name.value if isinstance(name, SessionEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers run outside the lock on a snapshot of the subscriber list, so a
    handler may subscribe or unsubscribe without deadlocking. Only the most
    recent handler failures are kept (``DEFAULT_ERROR_CAPACITY``).
    """

    DEFAULT_ERROR_CAPACITY = 20

    def __init__(self, *, error_capacity: int = DEFAULT_ERROR_CAPACITY) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: Deque[tuple[Event, BaseException]] = deque(maxlen=max(1, error_capacity))

    def subscribe(
        self, name: str | SessionEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event, [])
            remaining = [s for s in bucket if s is not sub]
            if remaining:
                self._subs[sub.event] = remaining
            else:
                self._subs.pop(sub.event, None)
        sub.active = False

    def publish(self, name: str | SessionEvent, payload: Any = None) -> Event:
        evt = Event(name=_key(name), payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(evt.name, ()))
        for sub in subs:
            if not sub.active:
                continue
            if sub.once:
                self.unsubscribe(sub)
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _log.exception("Handler for %s failed", evt.name)
                with self._lock:
                    self._errors.append((evt, exc))
        return evt

    def subscriber_count(self, name: str | SessionEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()
