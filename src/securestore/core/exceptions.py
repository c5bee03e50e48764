"""
Exceptions for the securestore package
Everything raised on purpose derives from SecureStoreError so callers have one catch-all
"""


class SecureStoreError(Exception):
    # general container for errors
    pass


class DecryptionError(SecureStoreError):
    # raised on bad ciphertext length or bad padding (usually a wrong password)
    pass


class CorruptFileError(SecureStoreError):
    # raised when decrypted bytes are not the JSON account mapping
    pass


class FilesystemError(SecureStoreError, OSError):
    # raised when reading, writing or creating directories fails
    pass


class UnsupportedAlgorithmError(SecureStoreError, ValueError):
    # raised when an algorithm identifier is not known
    pass


class KeystoreUnavailableError(SecureStoreError, RuntimeError):
    # raised when the keyring package is not installed
    pass
