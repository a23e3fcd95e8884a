import logging
import os
import shutil
import stat
import tempfile

from pathlib import Path

logger = logging.getLogger(__name__)

FILE_PERM = 0o600


class FileOps:
    """Byte-level file primitives used by the replacer.

    Subclass and override a method to simulate a failing disk.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def mode(self, path: Path) -> int:
        return stat.S_IMODE(path.stat().st_mode)

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_bytes(self, path: Path, data: bytes, mode: int = FILE_PERM) -> None:
        """Write through a temp sibling so ``path`` is either old or new, never partial."""
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp, mode)
            os.replace(tmp, path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("wrote %d bytes to %s", len(data), path)

    def copy(self, src: Path, dst: Path) -> None:
        shutil.copy2(src, dst)
        logger.debug("copied %s -> %s", src, dst)

    def remove(self, path: Path) -> None:
        path.unlink()
        logger.debug("removed %s", path)


LOCAL_FS = FileOps()
