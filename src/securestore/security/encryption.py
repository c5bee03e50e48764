"""
Password-bound encryption of the account mapping file.

The on-disk layout is the one ``openssl enc -nosalt`` writes: the file is the
raw cipher output. There is no magic, no ``Salted__`` block, no stored IV and
no MAC. Key and IV are re-derived from the password on every call, so the same
password and algorithm must be supplied every time.

The plaintext is the account mapping serialized the way ``JSON.stringify(obj,
null, 2)`` does it, so a file written here is byte-identical to running
``openssl enc`` over that JSON text.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from securestore.core.exceptions import CorruptFileError
from .crypto import CipherProfile, decrypt_with_password, encrypt_with_password, get_profile

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Frame codec
# ----------------------------------------------------------------------

def to_file(ciphertext: bytes) -> bytes:
    # no header in no-salt mode
    return ciphertext


def from_file(raw: Optional[bytes]) -> Optional[bytes]:
    """Return the ciphertext held in ``raw``, or ``None`` for an empty store."""
    if not raw:
        return None
    return raw


# ----------------------------------------------------------------------
# JSON codec
# ----------------------------------------------------------------------

def dump_mapping(mapping: Dict[str, Any]) -> bytes:
    return json.dumps(mapping, indent=2, ensure_ascii=False).encode("utf-8")


def load_mapping(raw: bytes) -> Dict[str, Any]:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as err:
        raise CorruptFileError(
            "decrypted data is not valid JSON (wrong password, algorithm or a damaged file)"
        ) from err
    if not isinstance(obj, dict):
        raise CorruptFileError(f"expected a JSON object at top level, got {type(obj).__name__}")
    return obj


class StoreCipher:
    """
    Encrypts and decrypts the account mapping for one (password, algorithm) pair.

    Holds no derived key material; every call derives it again from the
    password so nothing key-related outlives a single operation.
    """

    def __init__(self, password: bytes | str, algorithm: Optional[str] = None):
        if isinstance(password, str):
            password = password.encode("utf-8")
        self._password = password
        self.profile: CipherProfile = get_profile(algorithm)

    def __repr__(self) -> str:
        return f"StoreCipher(algorithm={self.profile.name!r})"

    # ------------------------------------------------------------------
    # Byte-level encryption
    # ------------------------------------------------------------------

    def encrypt_bytes(self, data: bytes) -> bytes:
        return to_file(encrypt_with_password(self.profile, self._password, data))

    def decrypt_bytes(self, raw: Optional[bytes]) -> Optional[bytes]:
        """Decrypt file contents; ``None`` when the file was missing or empty."""
        ciphertext = from_file(raw)
        if ciphertext is None:
            return None
        return decrypt_with_password(self.profile, self._password, ciphertext)

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def encrypt_json(self, mapping: Dict[str, Any]) -> bytes:
        return self.encrypt_bytes(dump_mapping(mapping))

    def decrypt_json(self, raw: Optional[bytes]) -> Dict[str, Any]:
        """
        Decrypt file contents into the mapping they hold.

        Missing or empty contents give an empty mapping without touching the
        cipher. Raises ``DecryptionError`` from the cipher layer and
        ``CorruptFileError`` when the plaintext is not a JSON object.
        """
        plaintext = self.decrypt_bytes(raw)
        if plaintext is None:
            logger.debug("empty store file, starting from an empty mapping")
            return {}
        return load_mapping(plaintext)
