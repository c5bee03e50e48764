"""Password-based key derivation compatible with ``openssl enc -nosalt -md md5``."""
import hashlib
from typing import Tuple


DIGEST_NAME = "md5"


def derive_key_material(password: bytes | str, total_len: int) -> bytes:
    """
    Derive ``total_len`` bytes of ``key || iv`` from a password.

    Round 0 is ``MD5(password)``, every following round is
    ``MD5(previous_round || password)``. Rounds are concatenated and the
    result is cut to ``total_len``. No salt is mixed in, so the output only
    depends on the password.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if total_len < 0:
        raise ValueError("total_len must not be negative")

    material = b""
    previous = b""
    while len(material) < total_len:
        previous = hashlib.new(DIGEST_NAME, previous + password).digest()
        material += previous
    return material[:total_len]


def split_key_material(material: bytes, key_len: int, iv_len: int) -> Tuple[bytes, bytes]:
    if len(material) < key_len + iv_len:
        raise ValueError(
            f"key material too short: {len(material)} bytes (need {key_len + iv_len})"
        )
    return material[:key_len], material[key_len:key_len + iv_len]
