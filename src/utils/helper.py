import datetime as _dt

from pathlib import Path

from utils.dataModels import BACKUP_INFIX, BACKUP_TIME_FMT, LOCKED_SUFFIX


def locked_name(path: Path | str) -> Path:
    """`notes.txt` -> `notes.txt.enc`; already locked names are returned as is."""
    p = Path(path)
    if p.name.endswith(LOCKED_SUFFIX):
        return p
    return p.with_name(p.name + LOCKED_SUFFIX)


def unlocked_name(path: Path | str) -> Path:
    p = Path(path)
    if p.name.endswith(LOCKED_SUFFIX) and p.name != LOCKED_SUFFIX:
        return p.with_name(p.name[: -len(LOCKED_SUFFIX)])
    return p


def backup_path_for(path: Path | str, now: _dt.datetime | None = None) -> Path:
    p = Path(path)
    stamp = (now or _dt.datetime.now()).strftime(BACKUP_TIME_FMT)
    return p.with_name(f"{p.name}{BACKUP_INFIX}{stamp}")
