"""
In-memory service -> account -> secret mapping.

All operations are synchronous and pure with respect to the file system; the
session layer loads an AccountStore from the decrypted file, applies a single
operation and writes it back when something changed.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .exceptions import CorruptFileError


AccountMapping = Dict[str, Dict[str, str]]


def _validate(data: Any) -> AccountMapping:
    if not isinstance(data, dict):
        raise CorruptFileError("account mapping must be a JSON object")
    for service, accounts in data.items():
        if not isinstance(accounts, dict):
            raise CorruptFileError(f"service {service!r} must map to a JSON object")
        for account, secret in accounts.items():
            if not isinstance(secret, str):
                raise CorruptFileError(
                    f"secret for {service!r}/{account!r} must be a string"
                )
    return data


def _check_secret(secret: Any) -> None:
    # a non-string secret would make the written file unreadable
    if secret is not None and not isinstance(secret, str):
        raise TypeError(f"secret must be a string, got {type(secret).__name__}")


class AccountStore:
    """Nested mapping of service -> account -> secret."""

    def __init__(self, data: Optional[AccountMapping] = None):
        self._data: AccountMapping = data if data is not None else {}

    @classmethod
    def from_dict(cls, data: Any) -> "AccountStore":
        return cls(_validate(data))

    def to_dict(self) -> AccountMapping:
        return self._data

    def __len__(self) -> int:
        return sum(len(accounts) for accounts in self._data.values())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, service: str, account: str) -> Optional[str]:
        return self._data.get(service, {}).get(account)

    def find(self, service: str) -> Optional[str]:
        """Return a secret stored under ``service``, or None if it has no accounts."""
        accounts = self._data.get(service)
        if not accounts:
            return None
        return next(iter(accounts.values()))

    def services(self) -> List[str]:
        return list(self._data)

    def accounts(self, service: str) -> List[str]:
        return list(self._data.get(service, {}))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set(self, service: str, account: str, secret: Optional[str] = None) -> bool:
        """
        Insert ``secret`` only when (service, account) holds nothing yet.

        Returns False, leaving the mapping untouched, when the pair already
        exists or when no secret was given.
        Raises TypeError for a secret that is not a string.
        """
        _check_secret(secret)
        if not secret or self.get(service, account) is not None:
            return False
        self._data.setdefault(service, {})[account] = secret
        return True

    def replace(self, service: str, account: str, secret: Optional[str]) -> bool:
        """
        Create or overwrite the secret for (service, account).

        The return value means "mutation applied"; it is True both when a
        value was overwritten and when a new one was created.
        Raises TypeError for a secret that is not a string.
        """
        _check_secret(secret)
        if not secret:
            return False
        self._data.setdefault(service, {})[account] = secret
        return True

    def delete(self, service: str, account: str) -> Union[str, bool]:
        """Remove and return the secret, or return False when there was none."""
        accounts = self._data.get(service)
        if not accounts or account not in accounts:
            return False
        secret = accounts.pop(account)
        if not accounts:
            # drop services left without accounts
            del self._data[service]
        return secret
