"""Small helper to resolve the store path, algorithm and password for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional
import getpass
import logging
import os

from securestore.core.session import SecureStore, open_store
from securestore.security.crypto import DEFAULT_ALGORITHM
from securestore.security.keystore import load_store_password

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".securestore" / "secure.enc"


@dataclass
class CliContext:
    """Resolved inputs for one CLI invocation."""

    path: Path
    algorithm: str
    use_keyring: bool = False

    def resolve_password(self, prompt: Callable[[str], str] = getpass.getpass) -> str:
        """
        Find the store password.

        Order: ``SECURESTORE_PASSWORD``, then the OS keyring entry for this
        store when ``--keyring`` was given, then an interactive prompt.
        """
        password = os.getenv("SECURESTORE_PASSWORD")
        if password:
            return password
        if self.use_keyring:
            password = load_store_password(self.path)
            if password:
                logger.debug("using password remembered in the OS keyring for %s", self.path)
                return password
            logger.info("no password remembered for %s, prompting", self.path)
        return prompt(f"Password for {self.path}: ")

    def open(
        self,
        password: Optional[str] = None,
        prompt: Callable[[str], str] = getpass.getpass,
    ) -> SecureStore:
        """Open the store; the password is resolved (with ``prompt``) only when not given."""
        if password is None:
            password = self.resolve_password(prompt)
        return open_store(self.path, password, self.algorithm)


def build_context(
    path: Optional[str | Path] = None,
    algorithm: Optional[str] = None,
    use_keyring: bool = False,
) -> CliContext:
    """Apply the flag > environment > default order for path and algorithm."""
    store_path = Path(path or os.getenv("SECURESTORE_PATH") or DEFAULT_STORE_PATH).expanduser()
    algo = algorithm or os.getenv("SECURESTORE_ALGORITHM") or DEFAULT_ALGORITHM
    return CliContext(path=store_path, algorithm=algo, use_keyring=use_keyring)
