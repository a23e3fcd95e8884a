import logging

from enum import Enum
from pathlib import Path

from utils.dataModels import LOCKED_SUFFIX
from utils.errors import AlreadyLockedError, NotFoundError, NotLockedError
from utils.helper import locked_name, unlocked_name

logger = logging.getLogger(__name__)


class LockState(Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    MISSING = "missing"


def has_locked_suffix(path: Path | str) -> bool:
    """Name-only test: does ``path`` carry the locked suffix?"""
    return Path(path).name.endswith(LOCKED_SUFFIX)


def lock_state(path: Path | str) -> LockState:
    """State of the artifact ``path`` refers to, by either of its names.

    The locked form wins when both names exist.
    """
    if locked_name(path).is_file():
        return LockState.LOCKED
    if unlocked_name(path).is_file():
        return LockState.UNLOCKED
    return LockState.MISSING


def is_locked(path: Path | str) -> None:
    """Return ``None`` if ``path`` is locked, raise otherwise.

    Raises:
        NotLockedError: only the unlocked form exists.
        NotFoundError: neither form exists.
    """
    state = lock_state(path)
    logger.debug("lock state of %s: %s", path, state.value)
    if state is LockState.UNLOCKED:
        raise NotLockedError(f"file is not locked: {Path(path).name!r}", path)
    if state is LockState.MISSING:
        raise NotFoundError(f"file not found: {Path(path).name!r}", path)


def assert_unlocked(path: Path | str) -> None:
    """Raise :class:`AlreadyLockedError` if ``path`` is locked; unlock it first."""
    if lock_state(path) is LockState.LOCKED:
        raise AlreadyLockedError(f"file is locked: {locked_name(path).name!r}", locked_name(path))
