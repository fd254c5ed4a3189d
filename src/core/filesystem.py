"""Filesystem utility helpers."""

from __future__ import annotations

import os
from datetime import datetime, timezone


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def read_bytes(path: str) -> bytes:
    with open(path, "rb") as fh:
        return fh.read()


def write_bytes_atomic(path: str, content: bytes) -> None:
    """Write ``content`` to ``path`` via a sibling temp file and ``os.replace``.

    Readers see either the previous file or the complete new one, never a
    partially written file.
    """
    dir_part = os.path.dirname(path)
    if dir_part:
        ensure_dir(dir_part)
    tmp = path + ".tmp"
    try:
        with open(tmp, "wb") as fh:
            fh.write(content)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def move_aside(path: str, suffix: str) -> str:
    """Rename ``path`` to ``<path><suffix>.<UTC timestamp>`` and return the new path."""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    target = f"{path}{suffix}.{stamp}"
    os.replace(path, target)
    return target
