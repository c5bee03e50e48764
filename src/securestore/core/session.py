"""Serialized read-modify-write session over one encrypted store file.

A SecureStore owns a file path, a password and a cipher profile. Every public
operation is queued on a per-handle asyncio.Lock (FIFO in call order) and runs
a full cycle while holding it:

    read file -> decrypt -> apply operation -> (if mutated) encrypt -> atomic write

so callers sharing one handle never lose updates. Blocking file and crypto work
runs in a worker thread. No decrypted state is kept between operations.

The queue lock belongs to the event loop that is running when a call is made;
a handle reused under a new loop (for example a second asyncio.run) starts a
fresh queue there.

Two handles (or two processes) on the same path are not coordinated with each
other; only calls made through the same handle are serialized.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional, TypeVar, Union

from securestore.security.encryption import StoreCipher
from .accounts import AccountStore
from .exceptions import SecureStoreError
from .storage import read_file, write_file_atomic

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SecureStore:
    def __init__(self, path: Path | str, password: bytes | str, algorithm: Optional[str] = None):
        self.path = Path(path).expanduser()
        self._cipher = StoreCipher(password, algorithm)
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def __repr__(self) -> str:
        return f"SecureStore(path={str(self.path)!r}, algorithm={self.algorithm!r})"

    @property
    def algorithm(self) -> str:
        return self._cipher.profile.name

    # ------------------------------------------------------------------
    # File cycle
    # ------------------------------------------------------------------

    def load(self) -> AccountStore:
        """Read and decrypt the current file into an AccountStore."""
        raw = read_file(self.path)
        return AccountStore.from_dict(self._cipher.decrypt_json(raw))

    def save(self, store: AccountStore) -> None:
        write_file_atomic(self.path, self._cipher.encrypt_json(store.to_dict()))

    def _cycle(self, operation: Callable[[AccountStore], T], mutating: bool) -> T:
        store = self.load()
        result = operation(store)
        # mutations report "nothing changed" with False
        if mutating and result is not False:
            self.save(store)
        return result

    def _queue_lock(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def _submit(self, name: str, operation: Callable[[AccountStore], T], mutating: bool = False) -> T:
        async with self._queue_lock():
            logger.debug("%s on %s", name, self.path)
            work = asyncio.ensure_future(asyncio.to_thread(self._cycle, operation, mutating))
            try:
                return await asyncio.shield(work)
            except asyncio.CancelledError:
                # the file cycle must finish before the next queued call reads the file
                await asyncio.wait([work])
                raise
            except SecureStoreError as err:
                logger.warning("%s on %s failed: %s", name, self.path, err)
                raise

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_password(self, service: str, account: str) -> Optional[str]:
        return await self._submit("get", lambda store: store.get(service, account))

    async def set_password(self, service: str, account: str, secret: Optional[str] = None) -> bool:
        """Store ``secret`` unless the pair already has one; False when nothing was written."""
        return await self._submit(
            "set", lambda store: store.set(service, account, secret), mutating=True
        )

    async def replace_password(self, service: str, account: str, secret: str) -> bool:
        return await self._submit(
            "replace", lambda store: store.replace(service, account, secret), mutating=True
        )

    async def find_password(self, service: str) -> Optional[str]:
        """Return one secret stored under ``service`` (any account), or None."""
        return await self._submit("find", lambda store: store.find(service))

    async def delete_password(self, service: str, account: str) -> Union[str, bool]:
        """Remove the pair and return its secret; False when there was nothing to delete."""
        return await self._submit(
            "delete", lambda store: store.delete(service, account), mutating=True
        )

    async def list_services(self) -> List[str]:
        return await self._submit("list_services", lambda store: store.services())

    async def list_accounts(self, service: str) -> List[str]:
        return await self._submit("list_accounts", lambda store: store.accounts(service))


def open_store(path: Path | str, password: bytes | str, algorithm: Optional[str] = None) -> SecureStore:
    """
    Open a handle on an encrypted store file.

    The file does not need to exist; it is created (with any missing parent
    directories) by the first write. ``algorithm`` takes the ``openssl enc``
    cipher names, ``aes256`` when omitted. Raises UnsupportedAlgorithmError for
    unknown names.
    """
    store = SecureStore(path, password, algorithm)
    logger.debug("opened %r", store)
    return store
