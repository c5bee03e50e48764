"""Security helpers: legacy OpenSSL-compatible KDF and ciphers for securestore.

This package provides:
- the ``EVP_BytesToKey`` style MD5 key/IV derivation used by ``openssl enc -nosalt``
- CBC block ciphers with PKCS#7 padding plus the RC4 stream cipher
- the no-salt frame codec and JSON helpers for the store file
- optional OS keystore storage of store passwords

The file format has no salt and no authentication tag; it exists for
compatibility with files written by ``openssl enc``, not as a modern design.
"""

from .kdf import derive_key_material, split_key_material
from .crypto import (
    CipherProfile,
    DEFAULT_ALGORITHM,
    get_profile,
    list_algorithms,
    encrypt,
    decrypt,
    encrypt_with_password,
    decrypt_with_password,
)
from .encryption import StoreCipher, to_file, from_file

__all__ = [
    "derive_key_material",
    "split_key_material",
    "CipherProfile",
    "DEFAULT_ALGORITHM",
    "get_profile",
    "list_algorithms",
    "encrypt",
    "decrypt",
    "encrypt_with_password",
    "decrypt_with_password",
    "StoreCipher",
    "to_file",
    "from_file",
]
