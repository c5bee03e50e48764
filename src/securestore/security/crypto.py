"""Cipher adapter matching the OpenSSL ``enc`` ciphers used in no-salt mode.

Supported profiles (key / iv / block sizes in bytes):
- aes256, aes-256-cbc: 32 / 16 / 16 (default)
- aes192, aes-192-cbc: 24 / 16 / 16
- aes128, aes-128-cbc: 16 / 16 / 16
- bf, blowfish, bf-cbc: 16 / 8 / 8
- rc4: 16 / 0 / stream

Block ciphers run in CBC mode with PKCS#7 padding, which is what ``openssl enc``
does by default. The stream cipher takes no IV and no padding.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from cryptography.hazmat.decrepit.ciphers.algorithms import ARC4, Blowfish
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, CipherAlgorithm, algorithms, modes

from securestore.core.exceptions import DecryptionError, UnsupportedAlgorithmError
from .kdf import derive_key_material, split_key_material

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "aes256"


@dataclass(frozen=True)
class CipherProfile:
    """Static description of one cipher as ``openssl enc`` configures it."""

    name: str
    key_len: int
    iv_len: int
    block_size: int
    is_stream: bool
    factory: Callable[[bytes], CipherAlgorithm]

    @property
    def material_len(self) -> int:
        return self.key_len + self.iv_len


AES256 = CipherProfile("aes-256-cbc", 32, 16, 16, False, algorithms.AES)
AES192 = CipherProfile("aes-192-cbc", 24, 16, 16, False, algorithms.AES)
AES128 = CipherProfile("aes-128-cbc", 16, 16, 16, False, algorithms.AES)
BLOWFISH = CipherProfile("bf-cbc", 16, 8, 8, False, Blowfish)
RC4 = CipherProfile("rc4", 16, 0, 1, True, ARC4)

_PROFILES: Dict[str, CipherProfile] = {
    "aes256": AES256,
    "aes-256-cbc": AES256,
    "aes192": AES192,
    "aes-192-cbc": AES192,
    "aes128": AES128,
    "aes-128-cbc": AES128,
    "bf": BLOWFISH,
    "blowfish": BLOWFISH,
    "bf-cbc": BLOWFISH,
    "rc4": RC4,
}


def list_algorithms() -> List[str]:
    return sorted(_PROFILES)


def get_profile(name: Optional[str] = None) -> CipherProfile:
    """Resolve an algorithm identifier; ``None`` selects the default."""
    key = (name or DEFAULT_ALGORITHM).strip().lower()
    try:
        return _PROFILES[key]
    except KeyError:
        raise UnsupportedAlgorithmError(
            f"Unsupported algorithm {name!r} (expected one of: {', '.join(list_algorithms())})"
        ) from None


def _build_cipher(profile: CipherProfile, key_material: bytes) -> Cipher:
    key, iv = split_key_material(key_material, profile.key_len, profile.iv_len)
    if profile.is_stream:
        return Cipher(profile.factory(key), mode=None)
    return Cipher(profile.factory(key), modes.CBC(iv))


def encrypt(profile: CipherProfile, key_material: bytes, plaintext: bytes) -> bytes:
    """Encrypt ``plaintext`` with ``key || iv`` taken from ``key_material``."""
    if not profile.is_stream:
        # PKCS#7 always pads, a whole block when the input is already aligned
        padder = padding.PKCS7(profile.block_size * 8).padder()
        plaintext = padder.update(plaintext) + padder.finalize()
    encryptor = _build_cipher(profile, key_material).encryptor()
    return encryptor.update(plaintext) + encryptor.finalize()


def decrypt(profile: CipherProfile, key_material: bytes, ciphertext: bytes) -> bytes:
    """
    Decrypt ``ciphertext`` and strip padding.

    Raises ``DecryptionError`` when a block-cipher ciphertext is empty or not
    block aligned, or when the padding does not validate.
    """
    if not profile.is_stream and (not ciphertext or len(ciphertext) % profile.block_size):
        raise DecryptionError(
            f"ciphertext length {len(ciphertext)} is not a positive multiple of "
            f"the {profile.name} block size ({profile.block_size})"
        )

    decryptor = _build_cipher(profile, key_material).decryptor()
    plaintext = decryptor.update(ciphertext) + decryptor.finalize()
    if profile.is_stream:
        return plaintext

    unpadder = padding.PKCS7(profile.block_size * 8).unpadder()
    try:
        return unpadder.update(plaintext) + unpadder.finalize()
    except ValueError as err:
        logger.debug("padding check failed for %s", profile.name)
        raise DecryptionError("bad decrypt (wrong password or algorithm?)") from err


def encrypt_with_password(profile: CipherProfile, password: bytes | str, plaintext: bytes) -> bytes:
    return encrypt(profile, derive_key_material(password, profile.material_len), plaintext)


def decrypt_with_password(profile: CipherProfile, password: bytes | str, ciphertext: bytes) -> bytes:
    return decrypt(profile, derive_key_material(password, profile.material_len), ciphertext)
