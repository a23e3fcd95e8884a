#!/usr/bin/env python3
"""
gmlock - lock (encrypt) and unlock a file in place under a passphrase

  gmlock lock notes.txt        -> notes.txt.enc   (notes.txt removed)
  gmlock unlock notes.txt.enc  -> notes.txt       (notes.txt.enc removed)
  gmlock status notes.txt      -> locked | unlocked | missing

Every rewrite goes through a backup: the original is copied to
`<file>.backup_<timestamp>`, the new content is written, then the original
and the backup are removed. If the write fails the original is copied back.
If that fails too the backup is left in place and its path is printed.

Security choices:
  - AEAD: AES-256-GCM via cryptography.hazmat, header bound as AAD
  - Argon2id via argon2-cffi low-level API
  - key = Argon2id(SHA3-512(passphrase)) -> 32 bytes or 256 bits
"""
from __future__ import annotations

import logging
import sys

from ui.cli import build_parser
from utils.errors import LockerError, WriteFailedAndRestoreFailedError

def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        args.func(args)
    except WriteFailedAndRestoreFailedError as e:
        print(f"[!] {e}", file=sys.stderr)
        print(f"[!] Manual recovery needed: copy {e.backup} back to {e.original}", file=sys.stderr)
        return 1
    except LockerError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
