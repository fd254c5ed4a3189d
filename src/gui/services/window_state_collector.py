"""Collects per-window state before quit.

Shutdown asks every open window for its state and waits until each one has
answered (or closed) before the session is saved. The collector only tracks
the answers; how the request reaches a window is up to the window layer.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, Iterable, List

__all__ = ["WindowStateCollector"]

_log = logging.getLogger(__name__)


class WindowStateCollector:
    def __init__(self, window_ids: Iterable[Hashable]):
        self._order: List[Hashable] = list(dict.fromkeys(window_ids))
        self._pending = set(self._order)
        self._states: Dict[Hashable, Dict[str, Any]] = {}

    def record(self, window_id: Hashable, window_state: Dict[str, Any]) -> bool:
        """Store the answer of one window. Returns True once all have answered.

        A second answer from the same window replaces the first one.
        """
        if window_id not in self._order:
            _log.warning("Ignoring window state from unknown window %r", window_id)
            return self.complete
        self._states[window_id] = window_state
        self._pending.discard(window_id)
        return self.complete

    def discard(self, window_id: Hashable) -> bool:
        """Forget a window that closed before answering."""
        if window_id in self._order:
            self._order.remove(window_id)
            self._pending.discard(window_id)
            self._states.pop(window_id, None)
        return self.complete

    @property
    def pending(self) -> List[Hashable]:
        return [wid for wid in self._order if wid in self._pending]

    @property
    def complete(self) -> bool:
        return not self._pending

    def per_window_state(self) -> List[Dict[str, Any]]:
        """Collected states in the order the windows were registered."""
        return [self._states[wid] for wid in self._order if wid in self._states]
