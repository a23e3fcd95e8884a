"""Tests for lock state detection and path naming."""

import pytest

from storage.state import LockState, assert_unlocked, has_locked_suffix, is_locked, lock_state
from utils.errors import AlreadyLockedError, NotFoundError, NotLockedError
from utils.helper import locked_name, unlocked_name


def test_names(tmp_path):
    p = tmp_path / "notes.txt"
    assert locked_name(p) == tmp_path / "notes.txt.enc"
    assert locked_name(locked_name(p)) == tmp_path / "notes.txt.enc"
    assert unlocked_name(tmp_path / "notes.txt.enc") == p
    assert unlocked_name(p) == p
    assert unlocked_name(".enc") == locked_name(".enc")


@pytest.mark.parametrize(
    "name, expected",
    [("db.sqlite3.enc", True), ("db.sqlite3", False), ("enc", False), ("db.encrypted", False)],
)
def test_has_locked_suffix(name, expected):
    assert has_locked_suffix(name) is expected


def test_unlocked(notes):
    assert lock_state(notes) is LockState.UNLOCKED
    assert lock_state(locked_name(notes)) is LockState.UNLOCKED
    with pytest.raises(NotLockedError):
        is_locked(notes)
    assert_unlocked(notes)


def test_locked(notes):
    notes.rename(locked_name(notes))
    for p in (notes, locked_name(notes)):
        assert lock_state(p) is LockState.LOCKED
        assert is_locked(p) is None
        with pytest.raises(AlreadyLockedError):
            assert_unlocked(p)


def test_missing(tmp_path):
    p = tmp_path / "missing.txt"
    assert lock_state(p) is LockState.MISSING
    with pytest.raises(NotFoundError):
        is_locked(p)
    assert_unlocked(p)


def test_directory_is_not_an_artifact(tmp_path):
    (tmp_path / "dir.enc").mkdir()
    assert lock_state(tmp_path / "dir") is LockState.MISSING


def test_locked_form_wins(notes):
    locked_name(notes).write_bytes(b"GMLK")
    assert lock_state(notes) is LockState.LOCKED


def test_state_check_does_not_touch_files(notes):
    before = notes.stat()
    for _ in range(3):
        lock_state(notes)
    assert notes.stat() == before
    assert notes.read_bytes() == b"hello"
