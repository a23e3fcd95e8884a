import argparse

from pathlib import Path

from storage.replace import stale_backups
from storage.state import LockState, lock_state
from utils.helper import locked_name, unlocked_name


def cmd_status(args: argparse.Namespace) -> None:
    """Print the lock state of a file and any backups an earlier failed run left behind."""
    path = Path(args.path)
    state = lock_state(path)
    shown = locked_name(path) if state is LockState.LOCKED else unlocked_name(path)
    print(f"{shown}\t{state.value}")

    backups = stale_backups(path)
    if not backups:
        return
    print(f"[!] {len(backups)} backup(s) left by an interrupted operation:")
    for b in backups:
        print(f"    {b}\t{b.stat().st_size} bytes")
