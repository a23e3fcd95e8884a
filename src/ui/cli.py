import argparse

from utils.core import cmd_lock, cmd_unlock
from utils.dataModels import DEFAULT_T_COST, DEFAULT_M_COST_KiB, DEFAULT_PARALLELISM
from utils.maintain import cmd_status

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gmlock", description="Lock (encrypt) and unlock files in place")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_lock = sub.add_parser("lock", help="Encrypt a file and rename it to <file>.enc")
    p_lock.add_argument("path", help="File to lock")
    p_lock.add_argument("--passphrase", help="Passphrase (prompted for when omitted)")
    p_lock.add_argument("-t", type=int, default=DEFAULT_T_COST, help="Argon2 time cost (iterations)")
    p_lock.add_argument("-m", type=int, default=DEFAULT_M_COST_KiB, help="Argon2 memory (KiB)")
    p_lock.add_argument("-p", type=int, default=DEFAULT_PARALLELISM, help="Argon2 parallelism")
    p_lock.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    p_lock.set_defaults(func=cmd_lock)

    p_unlock = sub.add_parser("unlock", help="Decrypt a locked file and drop the .enc suffix")
    p_unlock.add_argument("path", help="Locked file, with or without the .enc suffix")
    p_unlock.add_argument("--passphrase", help="Passphrase (prompted for when omitted)")
    p_unlock.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    p_unlock.set_defaults(func=cmd_unlock)

    p_status = sub.add_parser("status", help="Show whether a file is locked")
    p_status.add_argument("path", help="File, with or without the .enc suffix")
    p_status.set_defaults(func=cmd_status)

    return p
