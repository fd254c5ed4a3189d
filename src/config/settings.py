"""Global configuration and constants for session persistence."""

from __future__ import annotations

import os
from typing import Final, Mapping

APP_NAME: Final = "SessionKeeper"

# Bump when the persisted document changes incompatibly; the version is part
# of the file name so old and new schemas never share a file.
SESSION_STORAGE_VERSION: Final = 1
SESSION_STORAGE_NAME: Final = f"session-store-{SESSION_STORAGE_VERSION}"
TEST_SESSION_STORAGE_NAME: Final = f".sessionkeeper-test-session-store-{SESSION_STORAGE_VERSION}"

ENV_MODE_VAR: Final = "SESSIONKEEPER_ENV"
USER_DATA_DIR_VAR: Final = "SESSIONKEEPER_USER_DATA_DIR"
TEST_MODE: Final = "test"

CORRUPT_SUFFIX: Final = ".corrupt"


def is_test_environment(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(ENV_MODE_VAR) == TEST_MODE
