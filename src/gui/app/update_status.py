"""Update status codes stored under ``updates.status`` in the session document."""

from __future__ import annotations

from enum import Enum

__all__ = ["UpdateStatus"]


class UpdateStatus(str, Enum):  # str subclass so values compare equal to persisted JSON
    UPDATE_NONE = "none"
    UPDATE_CHECKING = "updateChecking"
    UPDATE_AVAILABLE = "updateAvailable"
    UPDATE_NOT_AVAILABLE = "updateNotAvailable"
    UPDATE_DOWNLOADING = "updateDownloading"
    UPDATE_ERROR = "updateError"
    UPDATE_APPLYING_RESTART = "updateApplyingRestart"
    # Installer already replaced the binaries and the user asked not to relaunch.
    UPDATE_APPLYING_NO_RESTART = "updateApplyingNoRestart"
