"""Tests for the bounded directory walker."""

import os
from pathlib import Path

import pytest

from gitstatuses.scanner import walk_dirs


def _tree(base):
    (base / "a" / "b" / "c").mkdir(parents=True)
    (base / "d").mkdir()
    (base / "file.txt").write_text("x")


def test_depth_one_is_immediate_children(tmp_path):
    _tree(tmp_path)
    found = {p.relative_to(tmp_path).as_posix() for p in walk_dirs(tmp_path, 1)}
    assert found == {"a", "d"}


def test_depth_bounds_descent(tmp_path):
    _tree(tmp_path)
    found = {p.relative_to(tmp_path).as_posix() for p in walk_dirs(tmp_path, 2)}
    assert found == {"a", "d", "a/b"}
    found = {p.relative_to(tmp_path).as_posix() for p in walk_dirs(tmp_path, 5)}
    assert found == {"a", "d", "a/b", "a/b/c"}


def test_empty_root(tmp_path):
    assert list(walk_dirs(tmp_path, 3)) == []


def test_symlinks_not_followed(tmp_path):
    (tmp_path / "real" / "inner").mkdir(parents=True)
    (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)
    # loop back to root would recurse forever if followed
    (tmp_path / "real" / "loop").symlink_to(tmp_path, target_is_directory=True)
    found = {p.relative_to(tmp_path).as_posix() for p in walk_dirs(tmp_path, 4)}
    assert found == {"real", "real/inner"}


def test_git_dir_not_yielded(tmp_path):
    (tmp_path / "repo" / ".git" / "objects").mkdir(parents=True)
    found = {p.relative_to(tmp_path).as_posix() for p in walk_dirs(tmp_path, 3)}
    assert found == {"repo"}


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root can read anything")
def test_unreadable_subtree_skipped(tmp_path):
    (tmp_path / "locked" / "hidden").mkdir(parents=True)
    (tmp_path / "open").mkdir()
    (tmp_path / "locked").chmod(0)
    try:
        found = {p.relative_to(tmp_path).as_posix() for p in walk_dirs(tmp_path, 3)}
    finally:
        (tmp_path / "locked").chmod(0o755)
    assert found == {"locked", "open"}


def test_unstattable_child_skipped(tmp_path, monkeypatch):
    """A child that can't be stat'ed is dropped; its siblings and parent still come through."""
    (tmp_path / "noexec" / "child").mkdir(parents=True)
    (tmp_path / "noexec" / "sibling").mkdir()
    (tmp_path / "open").mkdir()
    blocked = tmp_path / "noexec" / "child"
    real_is_symlink = Path.is_symlink

    def is_symlink(self):
        if self == blocked:
            raise PermissionError(13, "Permission denied", str(self))
        return real_is_symlink(self)

    monkeypatch.setattr(Path, "is_symlink", is_symlink)
    found = {p.relative_to(tmp_path).as_posix() for p in walk_dirs(tmp_path, 3)}
    assert found == {"noexec", "noexec/sibling", "open"}


def test_invalid_depth():
    with pytest.raises(ValueError):
        list(walk_dirs(".", 0))
