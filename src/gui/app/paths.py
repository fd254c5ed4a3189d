"""Storage location and process-exit helpers.

Qt is imported lazily inside the functions so that importing this module
stays cheap for headless tests.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping

from config import settings

__all__ = ["user_data_dir", "resolve_storage_path", "exit_application"]


def user_data_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Directory holding per-user application data.

    ``SESSIONKEEPER_USER_DATA_DIR`` wins when set; otherwise the platform's
    generic data location (via ``QStandardPaths``) plus the application name.
    """
    env = os.environ if environ is None else environ
    override = env.get(settings.USER_DATA_DIR_VAR)
    if override:
        return Path(override)
    from PyQt6.QtCore import QStandardPaths  # local import

    base = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
    if not base:
        base = str(Path.home() / ".local" / "share")
    return Path(base) / settings.APP_NAME


def resolve_storage_path(environ: Mapping[str, str] | None = None) -> Path:
    """Path of the session store file.

    Test runs (``SESSIONKEEPER_ENV=test``) use an isolated file in ``$HOME``
    so they never touch real user data.
    """
    env = os.environ if environ is None else environ
    if settings.is_test_environment(env):
        home = env.get("HOME")
        return (Path(home) if home else Path.home()) / settings.TEST_SESSION_STORAGE_NAME
    return user_data_dir(env) / settings.SESSION_STORAGE_NAME


def exit_application(code: int = 0) -> None:
    """Terminate the application without running the normal shutdown save.

    Asks a running Qt event loop to stop, then always exits the interpreter.
    ``QCoreApplication.exit`` is a no-op while no Qt loop is running (for
    example under ``asyncio.run``), so it cannot be the only exit path.
    """
    from PyQt6.QtCore import QCoreApplication  # local import

    app = QCoreApplication.instance()
    if app is not None:
        app.exit(code)
    sys.exit(code)
