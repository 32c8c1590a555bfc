"""In-memory key store, also the basis of file-backed stores."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from tezvault.vault import KeyReference, Vault, VaultError

__all__ = ["PrivateKeyEntry", "MemoryKeyReference", "MemoryVault"]

_DEFAULT_NAME = "Mem"


@dataclass(frozen=True)
class PrivateKeyEntry:
    """A private key with an optional name."""

    key: Any
    id: str = ""


class MemoryKeyReference(KeyReference):
    """A reference to a key held by a :class:`MemoryVault`."""

    def __init__(self, entry: PrivateKeyEntry, vault: "MemoryVault") -> None:
        self.entry = entry
        self._vault = vault

    @property
    def public_key(self):
        return self.entry.key.public_key()

    @property
    def vault(self) -> "MemoryVault":
        return self._vault

    @property
    def id(self) -> str:
        return self.entry.id

    def sign(self, message: bytes):
        """Sign ``message`` with the held private key."""
        try:
            return self.entry.key.sign(message)
        except Exception as exc:
            raise VaultError(f"({self._vault.name}): {exc}") from exc


class MemoryVault(Vault):
    """A vault keeping private keys in memory."""

    def __init__(
        self, keys: Iterable[PrivateKeyEntry] = (), name: str = _DEFAULT_NAME
    ) -> None:
        self._name = name or _DEFAULT_NAME
        self._keys: list[PrivateKeyEntry] = list(keys)
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    def list(self) -> Iterator[MemoryKeyReference]:
        """Iterate over a snapshot of the keys present when called."""
        with self._lock:
            snapshot = tuple(self._keys)
        return (MemoryKeyReference(entry, self) for entry in snapshot)

    def import_key(self, private_key: Any, name: str = "") -> MemoryKeyReference:
        """Add a private key and return a reference to it."""
        entry = PrivateKeyEntry(key=private_key, id=name)
        with self._lock:
            self._keys.append(entry)
        return MemoryKeyReference(entry, self)

    def close(self) -> None:
        """Drop the vault's hold on its private keys.

        References handed out earlier keep working; later listings are empty.
        """
        with self._lock:
            self._keys.clear()