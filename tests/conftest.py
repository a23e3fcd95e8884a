"""
Shared fixtures for the locker tests.

Key derivation runs with the cheapest Argon2id parameters the bounds allow,
so tests exercise the real primitives without paying for production costs.
"""

import errno
from pathlib import Path

import pytest

from storage.files import FileOps
from utils.dataModels import BACKUP_INFIX, KdfParams


@pytest.fixture
def fast_params() -> KdfParams:
    return KdfParams(t_cost=1, m_cost_kib=1024, parallelism=1)


@pytest.fixture
def notes(tmp_path: Path) -> Path:
    p = tmp_path / "notes.txt"
    p.write_bytes(b"hello")
    return p


class FlakyFS(FileOps):
    """FileOps that fails on demand.

    fail_write: the first write_bytes raises ENOSPC.
    fail_restore: every later write_bytes (the restore) raises EIO.
    fail_remove: paths whose removal raises EACCES.
    clobber: path overwritten with garbage when the first write fails.
    """

    def __init__(self, fail_write=False, fail_restore=False, fail_remove=(), clobber=None):
        self.fail_write = fail_write
        self.fail_restore = fail_restore
        self.fail_remove = {Path(p) for p in fail_remove}
        self.clobber = clobber
        self.writes = 0
        self.calls = []

    def write_bytes(self, path, data, mode=0o600):
        self.calls.append(("write", path))
        self.writes += 1
        if self.fail_write and self.writes == 1:
            if self.clobber is not None:
                Path(self.clobber).write_bytes(b"\x00garbage")
            raise OSError(errno.ENOSPC, "No space left on device", str(path))
        if self.fail_restore and self.writes > 1:
            raise OSError(errno.EIO, "Input/output error", str(path))
        super().write_bytes(path, data, mode)

    def copy(self, src, dst):
        self.calls.append(("copy", src, dst))
        if BACKUP_INFIX in src.name:
            # Mimic shutil.copy2 dying midway: destination already truncated.
            dst.write_bytes(b"")
            raise OSError(errno.EIO, "Input/output error", str(dst))
        super().copy(src, dst)

    def remove(self, path):
        self.calls.append(("remove", path))
        if path in self.fail_remove:
            raise OSError(errno.EACCES, "Permission denied", str(path))
        super().remove(path)


@pytest.fixture
def flaky_fs():
    return FlakyFS
