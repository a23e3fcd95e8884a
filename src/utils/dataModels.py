import struct

from dataclasses import dataclass, asdict
from typing import Dict

DEFAULT_T_COST = 3
DEFAULT_M_COST_KiB = 65536  # 64 MiB (tune per device)
DEFAULT_PARALLELISM = 4

# Bounds accepted when reading a header back; a tampered header must not
# be able to ask for unbounded time or memory.
MIN_T_COST, MAX_T_COST = 1, 16
MAX_M_COST_KiB = 1048576  # 1 GiB
MIN_PARALLELISM, MAX_PARALLELISM = 1, 16

KEY_LEN = 32
SALT_LEN = 16
NONCE_LEN = 12
TAG_LEN = 16

LOCK_MAGIC = b"GMLK"
LOCK_VERSION = 1
LOCK_HDR_FMT = ">4sBIII16s12s"  # magic, ver, t, m, p, salt(16), nonce(12)
LOCK_HDR_SIZE = struct.calcsize(LOCK_HDR_FMT)

LOCKED_SUFFIX = ".enc"
BACKUP_INFIX = ".backup_"
BACKUP_TIME_FMT = "%Y%m%d_%H%M%S"


@dataclass(frozen=True)
class KdfParams:
    t_cost: int = DEFAULT_T_COST
    m_cost_kib: int = DEFAULT_M_COST_KiB
    parallelism: int = DEFAULT_PARALLELISM

    def in_bounds(self) -> bool:
        return (
            MIN_T_COST <= self.t_cost <= MAX_T_COST
            and MIN_PARALLELISM <= self.parallelism <= MAX_PARALLELISM
            and 8 * self.parallelism <= self.m_cost_kib <= MAX_M_COST_KiB
        )

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class LockHeader:
    params: KdfParams
    salt: bytes
    nonce: bytes

    def to_bytes(self) -> bytes:
        return struct.pack(
            LOCK_HDR_FMT,
            LOCK_MAGIC,
            LOCK_VERSION,
            self.params.t_cost,
            self.params.m_cost_kib,
            self.params.parallelism,
            self.salt,
            self.nonce,
        )
