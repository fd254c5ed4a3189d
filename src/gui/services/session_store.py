"""Session store: persists the application state document across restarts.

On shutdown the collected application state is written to a single JSON file
(``session-store-<version>`` in the user data dir). On startup it is read back,
migrated and sanitized before the windows are recreated.

Load has two outcomes:
 - ``Resumed``: the normal path, carrying the migrated document
 - ``UpdateApplying``: an update was applied with "no restart" requested; the
   document was written back without its update status and the application
   must exit instead of resuming

Failures are raised, never swallowed: ``OSError`` for storage problems
(``SessionReadError`` when the file is empty) and ``SessionParseError`` for
contents that are not a valid document. Falling back to
``default_app_state()`` is the caller's decision.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from core import filesystem
from gui.app.app_settings import STARTUP_MODE, StartupMode, get_setting
from gui.app.paths import exit_application, resolve_storage_path
from gui.app.update_status import UpdateStatus

from .session_sanitizer import clean_session_data

__all__ = [
    "SessionStoreError",
    "SessionReadError",
    "SessionParseError",
    "Resumed",
    "UpdateApplying",
    "LoadOutcome",
    "default_app_state",
    "save_app_state",
    "read_session",
    "load_app_state",
]

_log = logging.getLogger(__name__)

Document = Dict[str, Any]


class SessionStoreError(Exception):
    """Base class for session store failures."""


class SessionReadError(SessionStoreError, OSError):
    """Raised when the storage file exists but yields no data."""


class SessionParseError(SessionStoreError, ValueError):
    """Raised when stored bytes are not a valid session document.

    The offending bytes are kept on ``raw`` for diagnostics / support reports.
    """

    def __init__(self, message: str, *, path: Path, raw: bytes):
        super().__init__(message)
        self.path = path
        self.raw = raw


@dataclass(frozen=True)
class Resumed:
    document: Document


@dataclass(frozen=True)
class UpdateApplying:
    document: Document


LoadOutcome = Union[Resumed, UpdateApplying]


def default_app_state() -> Document:
    """Application state used when no previous session can be loaded."""
    return {
        "sites": [],
        "visits": [],
        "settings": {},
    }


# ----------------------------------------------------------------------
# Save
# ----------------------------------------------------------------------
def _keeps_window_state(document: Document) -> bool:
    mode = get_setting(document.get("settings") or {}, STARTUP_MODE)
    return mode is None or mode == StartupMode.LAST_TIME.value


def _without_private_frames(window_state: Any) -> Any:
    if not isinstance(window_state, dict):
        return window_state
    filtered = dict(window_state)
    filtered["frames"] = [
        frame
        for frame in window_state.get("frames") or []
        if not (isinstance(frame, dict) and frame.get("isPrivate"))
    ]
    return filtered


def _persistable(document: Document) -> Document:
    """Shallow copy of ``document`` with the per-window policy applied."""
    payload = dict(document)
    per_window = payload.pop("perWindowState", None)
    if isinstance(per_window, list) and _keeps_window_state(document):
        payload["perWindowState"] = [_without_private_frames(w) for w in per_window]
    return payload


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _encode(document: Document) -> bytes:
    return json.dumps(document, default=_json_default, ensure_ascii=False).encode("utf-8")


async def save_app_state(document: Document, *, path: str | Path | None = None) -> None:
    """Write ``document`` to the session store.

    Private frames are never written. When the startup mode is anything but
    "last time", per-window state is left out entirely. The caller's document
    is not modified. Only one save may be in flight per path.
    """
    target = Path(path) if path is not None else resolve_storage_path()
    payload = _persistable(document)
    data = _encode(payload)
    await asyncio.to_thread(filesystem.write_bytes_atomic, str(target), data)
    _log.info(
        "Session saved: %s (%d windows, %d bytes)",
        target.name,
        len(payload.get("perWindowState") or []),
        len(data),
    )


# ----------------------------------------------------------------------
# Load
# ----------------------------------------------------------------------
def _decode(raw: bytes, path: Path) -> Document:
    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        _log.warning("Could not parse session data in %s (%d bytes): %s", path, len(raw), exc)
        raise SessionParseError(f"Invalid session data in {path}: {exc}", path=path, raw=raw) from exc
    if not isinstance(document, dict):
        _log.warning("Session data in %s is a %s, not a document", path, type(document).__name__)
        raise SessionParseError(
            f"Session data in {path} is not a JSON object", path=path, raw=raw
        )
    return document


def _pop_update_status(document: Document) -> Optional[str]:
    # Update status is always recalculated after a restart
    updates = document.get("updates")
    if isinstance(updates, dict):
        return updates.pop("status", None)
    return None


def _migrate(document: Document) -> Document:
    # Legacy list of window ids, never used
    document.pop("windows", None)
    per_window: Optional[List[Any]] = document.get("perWindowState")
    if isinstance(per_window, list):
        for index, window_state in enumerate(per_window):
            per_window[index] = clean_session_data(window_state)
    document["settings"] = document.get("settings") or {}
    return document


async def read_session(*, path: str | Path | None = None) -> LoadOutcome:
    """Read, migrate and sanitize the stored session.

    Returns ``UpdateApplying`` (after re-saving the document without its
    update status) when the previous run finished installing an update with
    no restart requested; ``Resumed`` otherwise.
    """
    source = Path(path) if path is not None else resolve_storage_path()
    raw = await asyncio.to_thread(filesystem.read_bytes, str(source))
    if not raw:
        raise SessionReadError(f"Session store {source} is empty")
    document = _decode(raw, source)

    status = _pop_update_status(document)
    if status == UpdateStatus.UPDATE_APPLYING_NO_RESTART:
        _log.info("Update applied without restart; saving session and exiting")
        await save_app_state(document, path=source)
        return UpdateApplying(document)

    _migrate(document)
    _log.info(
        "Session loaded: %s (%d windows)",
        source.name,
        len(document.get("perWindowState") or []),
    )
    return Resumed(document)


async def load_app_state(
    *,
    path: str | Path | None = None,
    exit_app: Callable[[int], None] = exit_application,
) -> Document:
    """Load the stored session document.

    In the update short-circuit case the document is saved first, then
    ``exit_app(0)`` is called and this coroutine never returns.
    """
    outcome = await read_session(path=path)
    if isinstance(outcome, Resumed):
        return outcome.document
    exit_app(0)
    # Exit was requested; the caller must never resume this session
    await asyncio.get_running_loop().create_future()
    return outcome.document  # pragma: no cover
