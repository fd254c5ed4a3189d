"""Service layer exports.

Responsibilities:
 - Session store (save / load / defaults)
 - Session sanitizer (per-window normalization on load)
 - Window state collection before quit
 - EventBus for session lifecycle notifications
"""

from .event_bus import EventBus, SessionEvent  # noqa: F401
from .session_sanitizer import EPHEMERAL_FRAME_FIELDS, clean_session_data  # noqa: F401
from .session_store import (  # noqa: F401
    Resumed,
    SessionParseError,
    SessionReadError,
    SessionStoreError,
    UpdateApplying,
    default_app_state,
    load_app_state,
    read_session,
    save_app_state,
)
from .window_state_collector import WindowStateCollector  # noqa: F401

__all__ = [
    "EventBus",
    "SessionEvent",
    "EPHEMERAL_FRAME_FIELDS",
    "clean_session_data",
    "Resumed",
    "UpdateApplying",
    "SessionStoreError",
    "SessionReadError",
    "SessionParseError",
    "default_app_state",
    "load_app_state",
    "read_session",
    "save_app_state",
    "WindowStateCollector",
]
