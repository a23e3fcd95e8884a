"""Locker exceptions; all derive from LockerError."""
from __future__ import annotations

from pathlib import Path


class LockerError(Exception):
    """Base class for every locker failure."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class PassphraseEmptyError(LockerError):
    def __init__(self) -> None:
        super().__init__("passphrase cannot be empty")


class PassphraseMismatchError(LockerError):
    def __init__(self) -> None:
        super().__init__("passphrases do not match")


class NotFoundError(LockerError):
    pass


class AlreadyLockedError(LockerError):
    pass


class NotLockedError(LockerError):
    pass


class TargetExistsError(LockerError):
    pass


class CryptoError(LockerError):
    """Random source or cipher setup failed."""


class InvalidParamsError(LockerError):
    """KDF cost parameters outside the accepted bounds."""


class MalformedCiphertextError(LockerError):
    """Blob is shorter than the fixed header."""


class DecryptionError(LockerError):
    """Wrong passphrase or corrupted ciphertext; the two are not told apart."""

    def __init__(self, path: Path | str | None = None):
        super().__init__("wrong passphrase or corrupted data", path)


class BackupError(LockerError):
    """Snapshot of the original could not be taken; nothing was modified."""


class ReplaceError(LockerError):
    pass


class WriteFailedRestoredError(ReplaceError):
    """New content not committed; the original was restored from backup."""

    def __init__(self, path: Path | str, write_error: BaseException):
        super().__init__(f"failed to write {path}: {write_error} (original restored)", path)
        self.write_error = write_error


class WriteFailedAndRestoreFailedError(ReplaceError):
    """Both the write and the restore failed; manual recovery is required."""

    def __init__(
        self,
        path: Path | str,
        original: Path | str,
        backup: Path | str,
        write_error: BaseException,
        restore_error: BaseException,
    ):
        super().__init__(
            f"failed to write {path}: {write_error}; restore also failed: {restore_error}. "
            f"content of {original} is kept in {backup}",
            path,
        )
        self.original = Path(original)
        self.backup = Path(backup)
        self.write_error = write_error
        self.restore_error = restore_error
