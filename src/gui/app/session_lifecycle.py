"""Session lifecycle: restore at startup, collect and save at shutdown.

Sits between the window layer and the session store and owns the policy the
store leaves to its caller:
 - A missing or unreadable store starts from ``default_app_state()``
 - A corrupt store is moved aside (``<path>.corrupt.<timestamp>``) so it can
   be attached to support reports, then defaults are used
 - Shutdown waits for every window's state before writing the session
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Hashable, Iterable, Optional

from config import settings
from core import filesystem
from gui.services.event_bus import EventBus, SessionEvent
from gui.services.session_store import (
    SessionParseError,
    default_app_state,
    load_app_state,
    save_app_state,
)
from gui.services.window_state_collector import WindowStateCollector

from .paths import exit_application, resolve_storage_path

__all__ = ["SessionLifecycle"]

_log = logging.getLogger(__name__)


class SessionLifecycle:
    def __init__(
        self,
        *,
        path: str | Path | None = None,
        event_bus: EventBus | None = None,
        exit_app: Callable[[int], None] = exit_application,
    ) -> None:
        self.path = Path(path) if path is not None else resolve_storage_path()
        self.event_bus = event_bus or EventBus()
        self._exit_app = exit_app

    # Startup -------------------------------------------------------
    async def restore(self) -> Dict[str, Any]:
        """Return the document to start the application with."""
        try:
            document = await load_app_state(path=self.path, exit_app=self._exit_for_update)
        except SessionParseError as exc:
            backup = await asyncio.to_thread(self._preserve_corrupt, exc.path)
            self.event_bus.publish(
                SessionEvent.SESSION_RESTORE_FAILED,
                {"reason": "corrupt", "path": str(exc.path), "backup": backup},
            )
            return default_app_state()
        except OSError as exc:
            _log.info("No previous session available: %s", exc)
            self.event_bus.publish(
                SessionEvent.SESSION_RESTORE_FAILED,
                {"reason": "unavailable", "path": str(self.path)},
            )
            return default_app_state()
        self.event_bus.publish(
            SessionEvent.SESSION_RESTORED,
            {"windows": len(document.get("perWindowState") or [])},
        )
        return document

    def _exit_for_update(self, code: int) -> None:
        self.event_bus.publish(SessionEvent.UPDATE_APPLYING, {"path": str(self.path)})
        self._exit_app(code)

    @staticmethod
    def _preserve_corrupt(path: Path) -> Optional[str]:
        try:
            backup = filesystem.move_aside(str(path), settings.CORRUPT_SUFFIX)
        except OSError as exc:
            _log.warning("Could not preserve corrupt session store %s: %s", path, exc)
            return None
        _log.warning("Corrupt session store moved to %s", backup)
        return backup

    # Shutdown ------------------------------------------------------
    def begin_shutdown(self, window_ids: Iterable[Hashable]) -> WindowStateCollector:
        return WindowStateCollector(window_ids)

    async def shutdown(self, app_state: Dict[str, Any], collector: WindowStateCollector) -> None:
        """Save ``app_state`` together with every collected window state."""
        if not collector.complete:
            raise RuntimeError(f"Still waiting for window state from {collector.pending}")
        document = dict(app_state)
        document["perWindowState"] = collector.per_window_state()
        await self.persist(document)

    async def persist(self, document: Dict[str, Any]) -> None:
        await save_app_state(document, path=self.path)
        self.event_bus.publish(SessionEvent.SESSION_SAVED, {"path": str(self.path)})
