"""SessionKeeper public API.

Small, stable surface for the window layer and tests. Import the lifecycle
from ``gui.app.session_lifecycle``; it pulls in the service layer.
"""

from __future__ import annotations

from .services import (  # noqa: F401
    EventBus,
    SessionEvent,
    clean_session_data,
    default_app_state,
    load_app_state,
    read_session,
    save_app_state,
)

__all__ = [
    "EventBus",
    "SessionEvent",
    "clean_session_data",
    "default_app_state",
    "load_app_state",
    "read_session",
    "save_app_state",
]
