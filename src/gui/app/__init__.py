"""Application layer: settings, update status, storage paths and the session
lifecycle used by the window layer at startup and shutdown.
"""

from .app_settings import DEFAULT_SETTINGS, STARTUP_MODE, StartupMode, get_setting  # noqa: F401
from .paths import exit_application, resolve_storage_path, user_data_dir  # noqa: F401
from .update_status import UpdateStatus  # noqa: F401

__all__ = [
    "DEFAULT_SETTINGS",
    "STARTUP_MODE",
    "StartupMode",
    "get_setting",
    "exit_application",
    "resolve_storage_path",
    "user_data_dir",
    "UpdateStatus",
]
