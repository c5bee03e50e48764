"""securestore: an encrypted service/account/secret store in a single file.

The file is byte-compatible with ``openssl enc -<cipher> -nosalt -md md5 -k <password>``
applied to the JSON mapping, so stores can be inspected or produced with openssl.
"""

from securestore.core.accounts import AccountStore
from securestore.core.exceptions import (
    CorruptFileError,
    DecryptionError,
    FilesystemError,
    KeystoreUnavailableError,
    SecureStoreError,
    UnsupportedAlgorithmError,
)
from securestore.core.session import SecureStore, open_store

__version__ = "0.1.0"

__all__ = [
    "AccountStore",
    "SecureStore",
    "open_store",
    "SecureStoreError",
    "DecryptionError",
    "CorruptFileError",
    "FilesystemError",
    "KeystoreUnavailableError",
    "UnsupportedAlgorithmError",
]
