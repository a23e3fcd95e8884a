"""Backup-then-write-then-cleanup replacement of a file's bytes.

START -> BACKED_UP -> WRITTEN -> DONE, or FAILED_RESTORED / FAILED_UNRESTORED
when the write fails.
"""
import glob
import logging

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple

from storage.files import FileOps, LOCAL_FS
from utils.dataModels import BACKUP_INFIX
from utils.errors import BackupError, WriteFailedAndRestoreFailedError, WriteFailedRestoredError
from utils.helper import locked_name, unlocked_name

logger = logging.getLogger(__name__)


class ReplaceState(Enum):
    START = "start"
    BACKED_UP = "backed-up"
    WRITTEN = "written"
    DONE = "done"
    FAILED_RESTORED = "failed-restored"
    FAILED_UNRESTORED = "failed-unrestored"


@dataclass(frozen=True)
class ReplaceResult:
    target: Path
    backup: Path
    leftovers: Tuple[Path, ...] = ()

    @property
    def clean(self) -> bool:
        return not self.leftovers


def _transition(state: ReplaceState, target: Path) -> None:
    logger.debug("replace %s: %s", target, state.value)


def _try_remove(fs: FileOps, path: Path) -> bool:
    try:
        fs.remove(path)
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning("could not remove %s: %s", path, e)
        return False
    return True


def _restore(fs: FileOps, original: Path, backup: Path, mode: int) -> None:
    # An intact original (always the case for a distinct target) is not rewritten.
    try:
        if fs.read_bytes(original) == fs.read_bytes(backup):
            return
    except OSError:
        pass
    fs.write_bytes(original, fs.read_bytes(backup), mode)


def safe_replace(
    original: Path | str,
    target: Path | str,
    backup: Path | str,
    data: bytes,
    fs: FileOps = LOCAL_FS,
) -> ReplaceResult:
    """Replace ``original`` by ``target`` holding ``data``.

    ``target`` may equal ``original`` (rewrite in place) or differ from it
    (rewrite under a new name, the original is removed afterwards). The new
    file keeps the permission bits of the original.

    Raises:
        BackupError: the snapshot could not be taken; nothing was changed.
        WriteFailedRestoredError: the write failed, the original is intact.
        WriteFailedAndRestoreFailedError: write and restore failed; the
            original bytes survive only in ``backup``.
    """
    original, target, backup = Path(original), Path(target), Path(backup)
    _transition(ReplaceState.START, target)

    if not fs.is_file(original):
        raise BackupError(f"cannot back up {original}: file not found", original)
    if fs.exists(backup):
        raise BackupError(f"backup path already exists: {backup}", backup)
    try:
        mode = fs.mode(original)
        fs.copy(original, backup)
    except OSError as e:
        _try_remove(fs, backup)
        raise BackupError(f"cannot back up {original}: {e}", original) from e
    _transition(ReplaceState.BACKED_UP, target)

    try:
        fs.write_bytes(target, data, mode)
    except OSError as write_err:
        logger.warning("write to %s failed, restoring %s from %s: %s", target, original, backup, write_err)
        try:
            _restore(fs, original, backup, mode)
        except OSError as restore_err:
            _transition(ReplaceState.FAILED_UNRESTORED, target)
            logger.error("restore of %s failed, original content kept in %s: %s", original, backup, restore_err)
            raise WriteFailedAndRestoreFailedError(target, original, backup, write_err, restore_err) from write_err
        _transition(ReplaceState.FAILED_RESTORED, target)
        _try_remove(fs, backup)
        raise WriteFailedRestoredError(target, write_err) from write_err
    _transition(ReplaceState.WRITTEN, target)

    leftovers = []
    if original.absolute() != target.absolute() and not _try_remove(fs, original):
        leftovers.append(original)
    if not _try_remove(fs, backup):
        leftovers.append(backup)
    _transition(ReplaceState.DONE, target)
    return ReplaceResult(target=target, backup=backup, leftovers=tuple(leftovers))


def stale_backups(path: Path | str) -> list[Path]:
    """Backups left next to ``path`` (locked or unlocked name) by an earlier failed run."""
    found = []
    for name in (unlocked_name(path), locked_name(path)):
        pattern = glob.escape(name.name) + BACKUP_INFIX + "*"
        found.extend(p for p in name.parent.glob(pattern) if p.is_file())
    return sorted(found)
