from pathlib import Path

import pytest

from config import settings
from gui.app.paths import exit_application, resolve_storage_path, user_data_dir


def test_test_mode_uses_home(tmp_path):
    env = {settings.ENV_MODE_VAR: "test", "HOME": str(tmp_path)}
    assert resolve_storage_path(env) == tmp_path / ".sessionkeeper-test-session-store-1"


def test_user_data_dir_override(tmp_path):
    env = {settings.USER_DATA_DIR_VAR: str(tmp_path / "profile")}
    assert user_data_dir(env) == tmp_path / "profile"
    assert resolve_storage_path(env) == tmp_path / "profile" / "session-store-1"


def test_storage_name_is_versioned():
    assert settings.SESSION_STORAGE_NAME == f"session-store-{settings.SESSION_STORAGE_VERSION}"


def test_default_user_data_dir_from_qt():
    pytest.importorskip("PyQt6.QtCore")
    path = user_data_dir({})
    assert isinstance(path, Path)
    assert path.name == settings.APP_NAME


def test_exit_without_qt_application_exits_interpreter():
    QtCore = pytest.importorskip("PyQt6.QtCore")
    if QtCore.QCoreApplication.instance() is not None:
        pytest.skip("a Qt application is running")
    with pytest.raises(SystemExit) as info:
        exit_application(0)
    assert info.value.code == 0


def test_exit_with_idle_qt_application_still_exits(qt_app):
    # No Qt event loop is running here, so QCoreApplication.exit alone does nothing
    with pytest.raises(SystemExit) as info:
        exit_application(0)
    assert info.value.code == 0
