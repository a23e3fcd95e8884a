import argparse
import logging

from pathlib import Path

from crypto.cipher import check_params, check_passphrase, decrypt, encrypt
from storage.files import FileOps, LOCAL_FS
from storage.replace import ReplaceResult, safe_replace
from storage.state import LockState, has_locked_suffix, is_locked, lock_state
from ui.prompt import confirm, read_passphrase
from utils.dataModels import KdfParams
from utils.errors import (
    AlreadyLockedError,
    DecryptionError,
    LockerError,
    MalformedCiphertextError,
    NotFoundError,
    TargetExistsError,
)
from utils.helper import backup_path_for, locked_name, unlocked_name

logger = logging.getLogger(__name__)


def _read(fs: FileOps, path: Path) -> bytes:
    try:
        return fs.read_bytes(path)
    except OSError as e:
        raise LockerError(f"failed to read {path}: {e}", path) from e


def check_lockable(path: Path, fs: FileOps = LOCAL_FS) -> None:
    if has_locked_suffix(path) or lock_state(path) is LockState.LOCKED:
        raise AlreadyLockedError(f"file is already locked: {locked_name(path).name!r}", locked_name(path))
    if not fs.is_file(path):
        raise NotFoundError(f"file not found: {str(path)!r}", path)


def lock(
    path: Path | str,
    passphrase: str,
    params: KdfParams | None = None,
    fs: FileOps = LOCAL_FS,
) -> ReplaceResult:
    """Encrypt ``path`` in place and rename it to ``<path>.enc``.

    On failure the plaintext is either untouched or restored from backup,
    and no locked file is left behind.
    """
    path = Path(path)
    logger.debug("locking file %s", path)
    check_passphrase(passphrase)
    params = params or KdfParams()
    check_params(params)
    check_lockable(path, fs)

    plaintext = _read(fs, path)
    ciphertext = encrypt(plaintext, passphrase, params)
    result = safe_replace(path, locked_name(path), backup_path_for(path), ciphertext, fs)
    logger.debug("file locked %s", result.target)
    return result


def unlock(path: Path | str, passphrase: str, fs: FileOps = LOCAL_FS) -> ReplaceResult:
    """Decrypt a locked file and restore its name without the ``.enc`` suffix.

    ``path`` may be given with or without the suffix. Decryption happens in
    memory before anything is written, so a wrong passphrase never touches
    the locked file.
    """
    logger.debug("unlocking file %s", path)
    check_passphrase(passphrase)
    is_locked(path)

    src = locked_name(path)
    dst = unlocked_name(src)
    if fs.exists(dst):
        raise TargetExistsError(f"refusing to overwrite existing file: {str(dst)!r}", dst)

    blob = _read(fs, src)
    try:
        plaintext = decrypt(blob, passphrase)
    except (DecryptionError, MalformedCiphertextError) as e:
        e.path = src
        raise
    result = safe_replace(src, dst, backup_path_for(src), plaintext, fs)
    logger.debug("file unlocked %s", result.target)
    return result


def _report(verb: str, result: ReplaceResult) -> None:
    print(f"[+] {verb} -> {result.target}")
    for leftover in result.leftovers:
        print(f"[!] could not remove {leftover}; delete it manually")


def cmd_lock(args: argparse.Namespace) -> None:
    path = Path(args.path)
    params = KdfParams(t_cost=args.t, m_cost_kib=args.m, parallelism=args.p)
    check_params(params)
    check_lockable(path)
    if not args.yes and not confirm(f"Lock {path.name!r}?"):
        print("[-] aborted")
        return

    passphrase = args.passphrase if args.passphrase is not None else read_passphrase(twice=True)
    _report("Locked", lock(path, passphrase, params))


def cmd_unlock(args: argparse.Namespace) -> None:
    path = Path(args.path)
    is_locked(path)
    if not args.yes and not confirm(f"Unlock {locked_name(path).name!r}?"):
        print("[-] aborted")
        return

    passphrase = args.passphrase if args.passphrase is not None else read_passphrase()
    _report("Unlocked", unlock(path, passphrase))
