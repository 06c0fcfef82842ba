import stat
from pathlib import Path

import pytest

from ajisai.utils import (
    atomic_write_file,
    compact_home_path,
    compact_home_paths_in_text,
    ensure_dir,
    is_dir_exists,
    remove_dir,
    resolve_abs_path,
)


def test_atomic_write_creates_private_file(tmp_path: Path) -> None:
    path = tmp_path / "out.md"

    atomic_write_file(path, "hello\n")

    assert path.read_text(encoding="utf-8") == "hello\n"
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert [item.name for item in tmp_path.iterdir()] == ["out.md"]


def test_atomic_write_replaces_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "out.md"
    path.write_text("old", encoding="utf-8")

    atomic_write_file(path, "new")

    assert path.read_text(encoding="utf-8") == "new"


def test_atomic_write_cleans_up_on_failure(tmp_path: Path) -> None:
    target = tmp_path / "taken"
    target.mkdir()

    with pytest.raises(OSError):
        atomic_write_file(target, "content")

    assert [item.name for item in tmp_path.iterdir()] == ["taken"]


def test_ensure_dir_creates_parents(tmp_path: Path) -> None:
    path = tmp_path / "a" / "b"

    ensure_dir(path)
    ensure_dir(path)

    assert is_dir_exists(path)


def test_ensure_dir_rejects_files(tmp_path: Path) -> None:
    path = tmp_path / "file"
    path.write_text("x", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        ensure_dir(path)


def test_remove_dir_ignores_missing(tmp_path: Path) -> None:
    remove_dir(tmp_path / "missing")

    (tmp_path / "present" / "nested").mkdir(parents=True)
    remove_dir(tmp_path / "present")

    assert not (tmp_path / "present").exists()


def test_resolve_abs_path_uses_base(tmp_path: Path) -> None:
    assert resolve_abs_path("./cache/../x", base=tmp_path) == tmp_path / "x"
    assert resolve_abs_path(tmp_path / "y", base=Path("/elsewhere")) == tmp_path / "y"


def test_compact_home_path(tmp_path: Path) -> None:
    assert compact_home_path(tmp_path) == "~"
    assert compact_home_path(tmp_path / "x") == "~/x"
    assert compact_home_paths_in_text(f"failed: {tmp_path}/x") == "failed: ~/x"
