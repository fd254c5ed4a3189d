import pytest

from core import filesystem


def test_write_bytes_atomic_creates_parent(tmp_path):
    target = tmp_path / "nested" / "dir" / "file.bin"
    filesystem.write_bytes_atomic(str(target), b"abc")
    assert filesystem.read_bytes(str(target)) == b"abc"
    assert not (target.parent / "file.bin.tmp").exists()


def test_move_aside(tmp_path):
    target = tmp_path / "store"
    target.write_bytes(b"broken")
    moved = filesystem.move_aside(str(target), ".corrupt")
    assert not target.exists()
    assert moved.startswith(str(target) + ".corrupt.")
    with open(moved, "rb") as fh:
        assert fh.read() == b"broken"


def test_failed_write_removes_temp_file(tmp_path, monkeypatch):
    target = tmp_path / "store"
    target.write_bytes(b"previous")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(filesystem.os, "replace", boom)
    with pytest.raises(OSError):
        filesystem.write_bytes_atomic(str(target), b"new")
    assert not (tmp_path / "store.tmp").exists()
    assert target.read_bytes() == b"previous"
