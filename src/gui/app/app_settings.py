"""Named application settings with defaults.

The persisted document carries a flat ``settings`` mapping keyed by dotted
setting names. Only values the user changed are stored there; everything else
resolves through ``DEFAULT_SETTINGS``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping

__all__ = [
    "STARTUP_MODE",
    "HOMEPAGE",
    "SHOW_HOME_BUTTON",
    "StartupMode",
    "DEFAULT_SETTINGS",
    "get_setting",
]

STARTUP_MODE = "general.startup-mode"
HOMEPAGE = "general.homepage"
SHOW_HOME_BUTTON = "general.show-home-button"


class StartupMode(str, Enum):
    """What the browser shows when it starts."""

    LAST_TIME = "lastTime"
    HOME_PAGE = "homePage"
    NEW_TAB_PAGE = "newTabPage"


DEFAULT_SETTINGS: Dict[str, Any] = {
    STARTUP_MODE: StartupMode.LAST_TIME.value,
    HOMEPAGE: "about:newtab",
    SHOW_HOME_BUTTON: False,
}


def get_setting(settings: Mapping[str, Any] | None, key: str) -> Any:
    """Return the stored value for ``key`` or its default.

    A stored ``None`` counts as unset. Unknown keys without a default return
    ``None``.
    """
    value = settings.get(key) if settings else None
    if value is None:
        return DEFAULT_SETTINGS.get(key)
    return value
