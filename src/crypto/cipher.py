"""Passphrase based authenticated encryption of a whole in-memory buffer.

Locked blob layout (big-endian):
    magic     : 4 bytes   -> b"GMLK"
    version   : 1 byte    -> 0x01
    t_cost    : u32
    m_cost    : u32  (KiB)
    parallel  : u32
    salt      : 16 bytes
    nonce     : 12 bytes
    ciphertext: remaining bytes (AES-256-GCM, 16-byte tag appended)

The 45-byte header is bound to the ciphertext as associated data, so
changing any byte of the blob fails authentication.
"""
import logging
import struct

from cryptography.exceptions import InvalidTag

from crypto.aead import aead_encrypt, aead_decrypt, random_bytes
from crypto.hash import derive_key
from utils.dataModels import (
    LOCK_HDR_FMT,
    LOCK_HDR_SIZE,
    LOCK_MAGIC,
    LOCK_VERSION,
    NONCE_LEN,
    SALT_LEN,
    TAG_LEN,
    KdfParams,
    LockHeader,
)
from utils.errors import DecryptionError, InvalidParamsError, MalformedCiphertextError, PassphraseEmptyError

logger = logging.getLogger(__name__)


def check_passphrase(passphrase: str) -> None:
    if not passphrase or not passphrase.strip():
        raise PassphraseEmptyError()


def check_params(params: KdfParams) -> None:
    if not params.in_bounds():
        raise InvalidParamsError(f"KDF parameters out of bounds: {params.to_dict()}")


def encrypt(plaintext: bytes, passphrase: str, params: KdfParams | None = None) -> bytes:
    """Encrypt under ``passphrase`` with a fresh salt and nonce on every call."""
    check_passphrase(passphrase)
    params = params or KdfParams()
    check_params(params)

    header = LockHeader(params=params, salt=random_bytes(SALT_LEN), nonce=random_bytes(NONCE_LEN))
    logger.debug("deriving key t=%d m=%d p=%d", params.t_cost, params.m_cost_kib, params.parallelism)
    key = derive_key(passphrase, header.salt, params)
    hdr = header.to_bytes()
    ct = aead_encrypt(key, header.nonce, plaintext, hdr)
    return hdr + ct


def parse_header(blob: bytes) -> tuple[LockHeader, bytes]:
    """Split ``blob`` into its header and the ciphertext+tag tail."""
    if len(blob) < LOCK_HDR_SIZE:
        raise MalformedCiphertextError(
            f"ciphertext too short: {len(blob)} bytes, header needs {LOCK_HDR_SIZE}"
        )
    magic, ver, t, m, p, salt, nonce = struct.unpack(LOCK_HDR_FMT, blob[:LOCK_HDR_SIZE])
    params = KdfParams(t_cost=t, m_cost_kib=m, parallelism=p)
    # Bad magic, version or params look exactly like a wrong passphrase.
    if magic != LOCK_MAGIC or ver != LOCK_VERSION or not params.in_bounds():
        logger.debug("rejecting header magic=%r version=%d", magic, ver)
        raise DecryptionError()
    return LockHeader(params=params, salt=salt, nonce=nonce), blob[LOCK_HDR_SIZE:]


def decrypt(blob: bytes, passphrase: str) -> bytes:
    """Decrypt a blob produced by :func:`encrypt`.

    Raises:
        PassphraseEmptyError: empty or blank passphrase.
        MalformedCiphertextError: blob shorter than the fixed header.
        DecryptionError: wrong passphrase or corrupted/tampered blob.
    """
    check_passphrase(passphrase)
    header, ct = parse_header(blob)
    if len(ct) < TAG_LEN:
        raise DecryptionError()

    key = derive_key(passphrase, header.salt, header.params)
    try:
        return aead_decrypt(key, header.nonce, ct, blob[:LOCK_HDR_SIZE])
    except InvalidTag as e:
        raise DecryptionError() from e
