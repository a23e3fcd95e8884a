import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from utils.dataModels import NONCE_LEN
from utils.errors import CryptoError


def random_bytes(n: int) -> bytes:
    try:
        return os.urandom(n)
    except (NotImplementedError, OSError) as e:
        raise CryptoError(f"random source unavailable: {e}") from e


def aead_encrypt(key: bytes, nonce: bytes, plaintext: bytes, aad: bytes | None = None) -> bytes:
    try:
        aesgcm = AESGCM(key)
        return aesgcm.encrypt(nonce, plaintext, aad)
    except ValueError as e:
        raise CryptoError(f"cipher rejected key or nonce: {e}") from e


def aead_decrypt(key: bytes, nonce: bytes, ct: bytes, aad: bytes | None = None) -> bytes:
    """Raises cryptography.exceptions.InvalidTag when authentication fails."""
    if len(nonce) != NONCE_LEN:
        raise CryptoError(f"nonce must be {NONCE_LEN} bytes, got {len(nonce)}")
    try:
        aesgcm = AESGCM(key)
    except ValueError as e:
        raise CryptoError(f"cipher rejected key: {e}") from e
    return aesgcm.decrypt(nonce, ct, aad)
