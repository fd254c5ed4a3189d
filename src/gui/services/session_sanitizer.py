"""Session data sanitizer.

Normalizes a persisted window state before it is handed back to the window
layer on startup:
 - Re-keys frames sequentially (closed frames first, then live frames)
 - Keeps only the previously active frame loaded
 - Resets navigation history flags and points ``src`` at the last location
 - Rebuilds thumbnail URLs from stored blobs (best effort)
 - Strips fields that are stale or unsafe after a restart

The sanitizer mutates the given mapping in place and never raises on
malformed input. Pure Python; Qt is only touched by the default thumbnail
URL factory.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

__all__ = [
    "EPHEMERAL_FRAME_FIELDS",
    "ThumbnailUrlFactory",
    "clean_session_data",
    "thumbnail_data_url",
]

_log = logging.getLogger(__name__)

ThumbnailUrlFactory = Callable[[Any], str]

# Frame fields removed on every load. Values are either derived at runtime,
# refer to objects of the previous process, or describe transient UI.
EPHEMERAL_FRAME_FIELDS: Tuple[str, ...] = (
    # ad block / tracking protection counters
    "replacedAds",
    "blockedAds",
    "blockedByTracking",
    # guest instance ids are meaningless to a new browser process
    "guestInstanceId",
    # audio indicator only shows once playback starts again
    "audioMuted",
    "audioPlaybackActive",
    "loading",
    # security state is always re-determined
    "security",
    "isActive",
    "modalPromptDetail",
    "basicAuthDetail",
    "searchDetail",
    "findDetail",
    "findbarShown",
    # parent linkage refers to keys that are regenerated below
    "parentFrameKey",
)


def thumbnail_data_url(blob: Any) -> str:
    """Build a ``data:`` URL for a thumbnail blob.

    Accepts raw bytes or the base64 text the store writes for them. Raises
    ``TypeError``/``ValueError`` for anything that is not an image.
    """
    if isinstance(blob, (bytes, bytearray, memoryview)):
        raw = bytes(blob)
    elif isinstance(blob, str):
        raw = base64.b64decode(blob, validate=True)
    else:
        raise TypeError(f"unsupported thumbnail blob type: {type(blob).__name__}")
    if not raw:
        raise ValueError("empty thumbnail blob")
    from PyQt6.QtCore import QByteArray, QMimeDatabase  # local import

    mime = QMimeDatabase().mimeTypeForData(QByteArray(raw)).name()
    if not mime.startswith("image/"):
        raise ValueError(f"thumbnail blob is not an image ({mime})")
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


def _strip(frame: Dict[str, Any], fields: Iterable[str]) -> None:
    for name in fields:
        frame.pop(name, None)


class _FrameRekeyer:
    """Assigns sequential keys across both frame lists of one window."""

    def __init__(self, window_state: Dict[str, Any], thumbnail_url_factory: ThumbnailUrlFactory):
        self.window_state = window_state
        self.thumbnail_url_factory = thumbnail_url_factory
        self.original_active_key = window_state.get("activeFrameKey")
        self.cursor = 0
        self.active_found = False

    def clean(self, frame: Dict[str, Any]) -> None:
        self.cursor += 1
        if not self.active_found and frame.get("key") == self.original_active_key:
            self.window_state["activeFrameKey"] = self.cursor
            self.active_found = True
        else:
            # Only the active frame is loaded eagerly after a restore
            frame["unloaded"] = True
        frame["key"] = self.cursor

        # History is not persisted
        frame["canGoBack"] = False
        frame["canGoForward"] = False

        # Otherwise the first URL the frame ever loaded would be shown
        frame["src"] = frame.get("location")

        blob = frame.get("thumbnailBlob")
        if blob:
            try:
                frame["thumbnailUrl"] = self.thumbnail_url_factory(blob)
            except Exception:  # noqa: BLE001
                frame.pop("thumbnailUrl", None)

        _strip(frame, EPHEMERAL_FRAME_FIELDS)


def _frame_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [frame for frame in value if isinstance(frame, dict)]


def clean_session_data(
    window_state: Optional[Dict[str, Any]],
    *,
    thumbnail_url_factory: ThumbnailUrlFactory = thumbnail_data_url,
) -> Dict[str, Any]:
    """Sanitize one window state in place and return it.

    ``None`` is replaced by a new empty mapping (returned). Missing ``frames``
    becomes an empty list; ``closedFrames`` is only processed when present.
    Closed frames are re-keyed before live frames because the window layer
    derives the next free key from the maximum key across both lists.
    """
    if window_state is None:
        window_state = {}

    # Context menus and hover previews never survive a restore
    window_state["contextMenuDetail"] = None
    window_state.pop("previewFrameKey", None)

    if not isinstance(window_state.get("frames"), list):
        window_state["frames"] = []

    rekeyer = _FrameRekeyer(window_state, thumbnail_url_factory)
    for frame in _frame_list(window_state.get("closedFrames")):
        rekeyer.clean(frame)
    for frame in _frame_list(window_state["frames"]):
        rekeyer.clean(frame)

    if not rekeyer.active_found:
        # A stale key could now collide with one of the reassigned keys
        window_state.pop("activeFrameKey", None)

    _log.debug(
        "Sanitized window state: %d frames re-keyed, active=%s",
        rekeyer.cursor,
        window_state.get("activeFrameKey"),
    )
    return window_state
