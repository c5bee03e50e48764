"""OS keystore integration using keyring for optional store-password storage.

The CLI can remember the password of a store file in the OS keystore so it
does not have to be typed on every call. Entries live under the
``securestore`` service with the resolved store path as the account. Use this
only for opt-in convenience; do not assume keyring provides hardware-backed
security on all platforms.
"""
from pathlib import Path
from typing import Optional

try:
    import keyring
    from keyring.errors import PasswordDeleteError
except ImportError:
    keyring = None
    PasswordDeleteError = None

from securestore.core.exceptions import KeystoreUnavailableError

KEYRING_SERVICE = "securestore"


def _require_keyring():
    if keyring is None:
        raise KeystoreUnavailableError("keyring package is not available; install keyring to use keystore features")


def _account_for(path: Path | str) -> str:
    return str(Path(path).expanduser().resolve())


def save_store_password(path: Path | str, password: str) -> None:
    """Persist the password of the store at ``path`` in the OS keystore."""
    _require_keyring()
    keyring.set_password(KEYRING_SERVICE, _account_for(path), password)


def load_store_password(path: Path | str) -> Optional[str]:
    """Load the remembered password for ``path``; None when nothing is stored."""
    _require_keyring()
    return keyring.get_password(KEYRING_SERVICE, _account_for(path))


def delete_store_password(path: Path | str) -> bool:
    """Forget the password for ``path``. Returns False if none was stored."""
    _require_keyring()
    try:
        keyring.delete_password(KEYRING_SERVICE, _account_for(path))
    except PasswordDeleteError:
        return False
    return True


def assess_keyring_backend() -> tuple[bool, str]:
    """Return (is_secure, message) describing the current keyring backend.

    Heuristics are used because the `keyring` package exposes different backends
    across platforms. If `keyring` is not available this returns (False, reason).
    """
    if keyring is None:
        return False, "keyring package is not installed"

    try:
        backend = keyring.get_keyring()
    except Exception as e:
        return False, f"failed to get keyring backend: {e}"

    name = backend.__class__.__name__
    priority = getattr(backend, "priority", None)

    insecure_indicators = ("Plaintext", "Uncrypted", "Simple", "File")
    if any(tok in name for tok in insecure_indicators):
        return False, f"insecure backend detected: {name}"

    if priority is not None and priority <= 0:
        return False, f"no suitable secure keyring backend available (priority={priority}, backend={name})"

    if "Win" in name or "Keychain" in name or "SecretService" in name or "KWallet" in name:
        return True, f"backend looks acceptable: {name} (priority={priority})"

    return True, f"unknown backend '{name}', treat with caution (priority={priority})"
