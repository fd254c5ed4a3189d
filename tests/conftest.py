# Every test runs in session-store test mode with a throwaway HOME so the
# real user session file is never read or written.

import pytest

from config import settings


@pytest.fixture(autouse=True)
def _isolated_session_env(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv(settings.ENV_MODE_VAR, settings.TEST_MODE)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(settings.USER_DATA_DIR_VAR, raising=False)
    return home


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "session-store-1"


@pytest.fixture
def window_state():
    return {
        "activeFrameKey": 7,
        "previewFrameKey": 3,
        "contextMenuDetail": {"left": 10, "top": 20},
        "closedFrames": [
            {"key": 2, "location": "https://closed.example/", "src": "https://first.example/"},
        ],
        "frames": [
            {"key": 3, "location": "https://a.example/", "src": "https://old-a.example/", "loading": True},
            {"key": 7, "location": "https://b.example/", "canGoBack": True, "security": {"isSecure": True}},
            {"key": 9, "location": "https://c.example/", "parentFrameKey": 7},
        ],
    }


@pytest.fixture
def qt_app(monkeypatch):
    QtCore = pytest.importorskip("PyQt6.QtCore")
    monkeypatch.setenv("QT_QPA_PLATFORM", "offscreen")
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
